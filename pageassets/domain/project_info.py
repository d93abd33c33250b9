from __future__ import annotations

PROJECT_NAME = "page-assets"
PROJECT_VERSION = "0.4.0"

# Client entries starting with this prefix point at the engine's own
# client runtime files instead of user code.
INTERNAL_MODULE_PREFIX = "@@pageassets/"
