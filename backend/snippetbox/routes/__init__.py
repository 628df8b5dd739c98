"""
Snippetbox — Routes Package
============================

Route Inventory:
    - snippets.py: GET /, GET /snippet/view/{id}, GET|POST /snippet/create
    - users.py:    GET|POST /user/signup, GET|POST /user/login, POST /user/logout
    - health.py:   GET /health

Routes stay thin: bind the form, run its validation policy, call a service,
then redirect or render. Persistence lives in services/.
"""
