"""
Repository package for the in-memory stores.

- `user`: fixed identity directory (credential store)
- `watchlist`: per-user movie lists

The credential store can be swapped by setting `CREDENTIAL_STORE_IMPL` to a
dotted path like:

    myapp.directory:LdapCredentialStore

where the class exposes `from_seed(seed_users, context=...)` and the lookups
of `app.repositories.user.CredentialStoreProtocol`.
"""
