# Services package init
"""
StackIt Backend: Services Layer
================================

What:  Business logic between the routes (HTTP) and the repositories (storage).

Service Inventory:
    - query_service:         filter/sort of question lists, reactive list view
    - question_detail:       single-question aggregate (answer, accept, vote)
    - vote_service:          one-vote-per-user ledger rules
    - question_service:      async workflows, including Ask Question with retry
    - notification_service:  per-user notification stores and their registry
    - profile_service:       per-user activity stats
    - presenters:            entity → response model conversion
    - auth:                  AuthSession passed to every operation
    - notifier:              user feedback ("toasts")

The domain pieces (query_service, question_detail, vote_service,
notification_service) are synchronous and import no storage backend.
"""
