# Routes package init
"""
Blog API: API Routes Package
============================

Route Inventory:
    - blogs.py:   GET/POST /api/blogs, GET/PUT/PATCH/DELETE /api/blogs/{id}
    - health.py:  GET /health

Routes stay thin: extract parameters, call the service, wrap the result in
an envelope. Validation and storage access belong to the service.
"""
