# Routes package init
"""
Postboard Backend — API Routes Package
========================================

Route Inventory:
    - posts.py:  GET    /api/posts             (list all posts)
                 POST   /api/posts             (create a post)
                 PUT    /api/posts/{post_id}   (update a post)
                 DELETE /api/posts/{post_id}   (delete a post)

Routes stay thin: extract request data, call PostService, return the result.
"""
