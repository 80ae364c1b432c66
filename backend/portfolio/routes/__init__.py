"""
Portfolio API — Route Package
==============================

Route modules, registered in this order (first match wins):
    - public.py:  /, /root, /projects, /projects/{id}, /bookings
    - admin.py:   /cloudinary/signature, /admin/projects[/{id}], /admin/bookings[/{id}]
    - health.py:  /health (outside the API prefix)

Handlers stay thin: request parsing and response shaping only. Data access
lives in the services package.
"""
