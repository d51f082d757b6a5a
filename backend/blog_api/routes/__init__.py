"""
Blog API — Routes Package
==========================

    - blogs.py:  /api/blogs and /api/blogs/{id}

Routes stay thin: read the request, call the service, pick the status code.
"""
