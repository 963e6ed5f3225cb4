"""Quota-gated presigned upload URLs for account storage namespaces."""
