"""Services — request-scoped writers and readers that orchestrate the store around core logic."""
