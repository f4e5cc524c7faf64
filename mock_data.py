"""
Mock Registry Data for Development and Testing

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19
"""

import re
from typing import Dict, Any
from urllib.parse import unquote

import httpx

MOCK_PUBLIC_REGISTRY = "http://public-registry.mock"

TAGS_PATH = re.compile(r"^/v2/(?P<name>.+)/tags/list$")


class MockRegistryData:
    """Mock data provider for container registry API responses"""

    def __init__(self):
        self.registries = {
            MOCK_PUBLIC_REGISTRY: {
                "name": "Public Registry Mock",
                "repositories": ["alpine", "nginx", "redis", "postgres", "ubuntu", "debian", "node",
                                 "python", "golang", "mysql", "busybox", "rabbitmq",
                                 "arm64v8/redis", "amd64/nginx", "mcr/windows-servercore"],
            },
            "http://quay-io.mock": {
                "name": "Quay.io Mock",
                "repositories": ["coreos/etcd", "prometheus/prometheus", "grafana/grafana",
                                 "jaegertracing/jaeger", "bitnami/kafka"],
            },
            "http://empty.mock": {
                "name": "Empty Registry",
                "repositories": [],
            },
            # Answers every request with HTTP 500
            "http://broken.mock": {
                "name": "Broken Registry",
                "status_code": 500,
            },
            # Answers the catalog with a body that is not the documented shape
            "http://malformed.mock": {
                "name": "Malformed Registry",
                "body": {"repos": ["alpine"]},
            },
        }

    def get_catalog(self, registry_url: str) -> Dict[str, Any]:
        """Mock response for GET /v2/_catalog"""
        registry = self.registries.get(registry_url.rstrip("/"))
        if registry is None:
            return {"status_code": 404, "json": {"errors": [{"code": "NOT_FOUND", "message": "registry not found"}]}}
        if "status_code" in registry:
            return {"status_code": registry["status_code"], "json": {"errors": [{"code": "UNKNOWN"}]}}
        if "body" in registry:
            return {"status_code": 200, "json": registry["body"]}
        return {"status_code": 200, "json": {"repositories": registry["repositories"]}}

    def get_tags(self, registry_url: str, repository: str) -> Dict[str, Any]:
        """Mock response for GET /v2/{name}/tags/list"""
        registry = self.registries.get(registry_url.rstrip("/"))
        if registry is None or repository not in registry.get("repositories", []):
            return {"status_code": 404,
                    "json": {"errors": [{"code": "NAME_UNKNOWN",
                                         "message": "repository name not known to registry"}]}}

        base_tags = ["latest", "stable"]
        if any(name in repository for name in ["alpine", "ubuntu", "debian"]):
            base_tags.extend(["3.18", "3.17", "jammy", "focal", "bullseye", "slim"])
        elif "nginx" in repository:
            base_tags.extend(["1.25", "1.24", "alpine", "mainline"])
        elif any(name in repository for name in ["postgres", "mysql"]):
            base_tags.extend(["15", "14", "13", "15-alpine"])
        elif "redis" in repository:
            base_tags.extend(["7.2", "7.0", "6.2", "7.2-alpine"])
        elif "prometheus" in repository or "grafana" in repository:
            base_tags.extend(["v2.45.0", "v2.44.0", "main"])
        else:
            base_tags.extend(["v1.2.3", "v1.2.2", "v1.1.0"])

        return {"status_code": 200, "json": {"name": repository, "tags": base_tags}}

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        """Serve a registry API request from the mock data"""
        registry_url = f"{request.url.scheme}://{request.url.host}"
        path = unquote(request.url.path)

        if path == "/v2/_catalog":
            result = self.get_catalog(registry_url)
        else:
            match = TAGS_PATH.match(path)
            if match:
                result = self.get_tags(registry_url, match.group("name"))
            else:
                result = {"status_code": 404, "json": {"errors": [{"code": "NOT_FOUND"}]}}

        return httpx.Response(
            result["status_code"],
            json=result["json"],
            headers={"Docker-Distribution-API-Version": "registry/2.0"},
        )

    def transport(self) -> httpx.MockTransport:
        """httpx transport that answers every request from this mock"""
        return httpx.MockTransport(self.handle_request)


# Global mock data instance
mock_registry = MockRegistryData()
