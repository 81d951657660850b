# Repositories package init
"""
StackIt Backend: Repository Layer
==================================

Storage behind the services. `base` defines the contracts, `memory` and `sql`
implement them, and `fixtures` holds the seed data.
"""
