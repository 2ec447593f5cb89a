"""Infrastructure — database pool, logging setup, security primitives and the mailer."""
