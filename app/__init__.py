# =============================================================================
# app/ - FastAPI Application Package
# =============================================================================
# This package contains the FastAPI web application:
# - main.py: App entry point, lifespan, middleware setup, error handlers
# - config.py: Environment variable loading and settings
# - auth/: Bearer-token guards backed by Supabase Auth
# - routers/: API endpoint definitions organized by resource
#
# The app layer is thin - it handles HTTP concerns and delegates
# business logic to the core/ package.
# =============================================================================
