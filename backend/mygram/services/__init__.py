# Services package init
"""
MyGram Backend - Services Layer
================================

What:  Business logic between routes (HTTP) and repositories (persistence).

Service Inventory:
    - OwnedResourceService: ownership-checked create/list/update/delete
    - PhotoService, CommentService, SocialMediaService: per-kind hooks
    - UserService: register, authenticate, update profile, delete account
    - RequestLookupCache / OwnerSummaryCache: per-request memoized lookups

Services receive the request's AsyncSession on every call and keep no
per-request state of their own.
"""
