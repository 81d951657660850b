# Routes package init
"""
StackIt Backend: API Routes Package
====================================

What:  HTTP route handlers. Each module covers one resource.

Route Inventory:
    - questions.py:      /api/questions ... (list, detail, ask, answer, accept, vote)
    - notifications.py:  /api/notifications ... (feed, read, read-all)
    - users.py:          /api/users/{id}, /api/tags
    - auth.py:           /api/auth/me, /api/auth/logout
    - health.py:         /health

Routes stay thin: they resolve dependencies, call a service, and present the
result. Business rules live in `stackit.services`.
"""
