# =============================================================================
# core/ - Contracts and Pure Services
# =============================================================================
# - models/: Pydantic schemas (error contract, query and file schemas)
# - services/: Framework-free decision logic (upload rules)
# =============================================================================
