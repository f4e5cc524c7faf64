"""
Catalog Facets - coarse classification of repository names

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19

The registry catalog only returns names, so every facet is derived from the
repository name: namespace for the provider, well known image names for the
category, and arch/OS namespaces or suffixes for the platform facets.
"""

from enum import Enum
from typing import Dict, Iterable, List, Optional, Set


class Facet(Enum):
    PROVIDER = "Provider"
    CATEGORY = "Categories"
    OPERATING_SYSTEM = "Operating Systems"
    ARCHITECTURE = "Architectures"


class Label(Enum):
    OFFICIAL = (Facet.PROVIDER, "Official")
    THIRD_PARTY = (Facet.PROVIDER, "Third Party")

    ANALYTICS = (Facet.CATEGORY, "Analytics")
    APPLICATION_RUNTIME = (Facet.CATEGORY, "Application Runtime")
    BASE_IMAGES = (Facet.CATEGORY, "Base Images")
    DATABASES = (Facet.CATEGORY, "Databases")
    DEVOPS = (Facet.CATEGORY, "DevOps")
    MESSAGING = (Facet.CATEGORY, "Messaging")
    MONITORING = (Facet.CATEGORY, "Monitoring")
    OPERATING_SYSTEM = (Facet.CATEGORY, "Operating System")
    STORAGE = (Facet.CATEGORY, "Storage")
    NETWORKING = (Facet.CATEGORY, "Networking")

    LINUX = (Facet.OPERATING_SYSTEM, "Linux")
    WINDOWS = (Facet.OPERATING_SYSTEM, "Windows")

    ARM64 = (Facet.ARCHITECTURE, "ARM64")
    AMD64 = (Facet.ARCHITECTURE, "AMD64")

    @property
    def facet(self) -> Facet:
        return self.value[0]

    @property
    def title(self) -> str:
        return self.value[1]


def labels_for(facet: Facet) -> List[Label]:
    return [label for label in Label if label.facet is facet]


CATEGORY_KEYWORDS = {
    Label.ANALYTICS: ["spark", "flink", "kibana", "logstash", "superset", "metabase", "jupyter", "tensorflow"],
    Label.APPLICATION_RUNTIME: ["node", "python", "golang", "openjdk", "java", "ruby", "php", "dotnet",
                                "rust", "perl", "tomcat"],
    Label.BASE_IMAGES: ["alpine", "busybox", "scratch", "distroless", "base-image", "ubi"],
    Label.DATABASES: ["mysql", "mariadb", "postgres", "mongo", "redis", "cassandra", "elasticsearch",
                      "couchdb", "memcached", "influxdb", "database"],
    Label.DEVOPS: ["jenkins", "gitlab", "sonarqube", "nexus", "vault", "consul", "registry", "argocd"],
    Label.MESSAGING: ["rabbitmq", "kafka", "nats", "activemq", "mosquitto", "pulsar"],
    Label.MONITORING: ["prometheus", "grafana", "jaeger", "alertmanager", "loki", "zabbix", "monitoring"],
    Label.OPERATING_SYSTEM: ["ubuntu", "debian", "centos", "fedora", "amazonlinux", "rockylinux",
                             "nanoserver", "servercore"],
    Label.STORAGE: ["minio", "etcd", "ceph", "nfs"],
    Label.NETWORKING: ["nginx", "traefik", "haproxy", "envoy", "caddy", "httpd", "coredns", "pause"],
}

ARCHITECTURE_MARKERS = {
    Label.ARM64: ["arm64v8", "arm64", "aarch64"],
    Label.AMD64: ["amd64", "x86_64"],
}

WINDOWS_MARKERS = ["windows", "nanoserver", "servercore", "win"]


def _name_parts(name: str) -> List[str]:
    parts = []
    for segment in name.lower().split("/"):
        parts.extend(part for part in segment.replace("_", "-").split("-") if part)
    return parts


def classify(name: str) -> Dict[Facet, Optional[Label]]:
    """Facet labels of one repository; None means the name says nothing"""
    lowered = name.lower()
    segments = lowered.split("/")
    parts = _name_parts(name)

    # Docker Hub publishes official per-arch builds under arm64v8/, amd64/, ...
    official_namespaces = {"library"}
    for markers in ARCHITECTURE_MARKERS.values():
        official_namespaces.update(markers)

    if len(segments) == 1 or segments[0] in official_namespaces:
        provider = Label.OFFICIAL
    else:
        provider = Label.THIRD_PARTY

    category = None
    image = segments[-1]
    for label, keywords in CATEGORY_KEYWORDS.items():
        if any(image.startswith(keyword) for keyword in keywords):
            category = label
            break
    if category is None:
        for label, keywords in CATEGORY_KEYWORDS.items():
            if any(keyword in parts for keyword in keywords):
                category = label
                break

    # Markers like x86_64 contain separators, so also match whole dash tokens
    tokens = set(parts) | set(lowered.replace("/", "-").split("-"))
    architecture = None
    for label, markers in ARCHITECTURE_MARKERS.items():
        if any(marker in tokens for marker in markers):
            architecture = label
            break

    if any(marker in parts for marker in WINDOWS_MARKERS):
        operating_system = Label.WINDOWS
    else:
        operating_system = Label.LINUX

    return {
        Facet.PROVIDER: provider,
        Facet.CATEGORY: category,
        Facet.OPERATING_SYSTEM: operating_system,
        Facet.ARCHITECTURE: architecture,
    }


class FacetFilter:
    """Selected labels per facet: AND across facets, OR inside one facet"""

    def __init__(self, selected: Iterable[Label] = ()):
        self.selected: Dict[Facet, Set[Label]] = {facet: set() for facet in Facet}
        for label in selected:
            self.selected[label.facet].add(label)

    def is_active(self) -> bool:
        return any(self.selected.values())

    def set_facet(self, facet: Facet, labels: Iterable[Label]) -> None:
        self.selected[facet] = {label for label in labels if label.facet is facet}

    def toggle(self, label: Label) -> None:
        chosen = self.selected[label.facet]
        if label in chosen:
            chosen.remove(label)
        else:
            chosen.add(label)

    def clear(self) -> None:
        for chosen in self.selected.values():
            chosen.clear()

    def matches(self, name: str) -> bool:
        if not self.is_active():
            return True

        labels = classify(name)
        for facet, chosen in self.selected.items():
            if not chosen:
                continue
            label = labels[facet]
            if label is None:
                # Names without an architecture marker are multi-arch
                if facet is Facet.ARCHITECTURE:
                    continue
                return False
            if label not in chosen:
                return False
        return True

    def describe(self) -> str:
        active = [
            f"{facet.value}: {', '.join(sorted(label.title for label in chosen))}"
            for facet, chosen in self.selected.items() if chosen
        ]
        return "; ".join(active) if active else "No filters"
