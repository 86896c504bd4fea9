# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the HTTP layer:
# - models/: Pydantic schemas for requests and responses
# - services/: Queries, ownership checks, storage uploads
#
# Routers stay thin: they resolve the caller and the connection, then
# delegate to a service.
# =============================================================================
