"""Services and collaborators of the user profile engine.

Modules:
    - context_catalog: Context capabilities (attribute support, auth flow, roles)
    - validator_registry: Known validator ids
    - base_metadata: Base metadata per context
    - profile_provider: Compiled metadata for one realm
    - provider_factory: Shared wiring, one provider per realm
"""
