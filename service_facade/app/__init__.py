"""
MangaDex facade service package.

The facade fronts a single service account on the MangaDex API and exposes
a small read-only REST surface:
- Authentication: one password-grant login at startup (fail open)
- Dispatch: a declarative table mapping each route to one gateway call
- Normalization: 200 with the gateway result, or 500 with {"error": ...}

Structure:
- app.main: FastAPI app, static routes and startup wiring.
- app.routes: the route table and request context extraction.
- app.normalizer: success/failure response shaping.
- app.auth: session credential and the bootstrapper.
- app.adapters: HTTP client and per-entity gateways for MangaDex.
- app.domain: the injected catalog context and composed operations.
"""
