"""
HTTP surface of BlogHub.

`main.create_application()` assembles the app; `routes.register_routes()`
mounts one router per resource from `handlers/`. Identity and service
wiring live in `dependencies/`, cross-cutting request handling in
`middleware/`.
"""
