"""Fake registries for tests."""

import httpx

REGISTRY = "https://registry.example.com"


def catalog_transport(repositories, status_code=200):
    """Transport serving one fixed catalog body for every request"""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v2/_catalog":
            return httpx.Response(status_code, json={"repositories": repositories})
        return httpx.Response(404, json={"errors": [{"code": "NOT_FOUND"}]})

    return httpx.MockTransport(handler)
