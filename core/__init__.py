# Core package - foundational components
#
# Modules:
# - config: Application settings and the database connection descriptor
# - logging: Structured logging
# - storage: Album repository (PostgreSQL)
