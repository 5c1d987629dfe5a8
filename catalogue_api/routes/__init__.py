# Routes package init
"""
Catalogue API - Routes Package
===============================

Route Inventory:
    - categories.py: GET/POST /categories, PUT/DELETE /categories/{id},
                     GET /categories/{id}/produits
    - products.py:   GET/POST /produits, PUT/DELETE /produits/{id}
    - dashboard.py:  GET /dashboard
    - reports.py:    GET /download-products-pdf, GET /download-products-pdf/file
    - health.py:     GET /health

Design Principle:
    Routes are THIN: validated input in, one service call (or two for the
    dashboard) out. Errors are raised, never caught here; the handlers in
    main.py turn them into responses.
"""
