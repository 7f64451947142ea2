"""Services - orchestration between business rules and the data access layer."""
