"""Backend detection: guess the server-side stack next to the Angular app.

Detection is a plain list of ``(glob, label)`` markers evaluated in order;
callers can pass their own list. Nothing in the migration engine depends on
it: the CLI attaches the label and its advice to the finished report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence, Tuple

UNKNOWN_BACKEND = "unknown"

Marker = Tuple[str, str]

# Root level first, then one directory down (backend/, server/, api/ ...).
BACKEND_MARKERS: List[Marker] = [
    ("pom.xml", "Java"),
    ("build.gradle", "Java"),
    ("build.gradle.kts", "Java"),
    ("src/main/java", "Java"),
    ("requirements.txt", "Python"),
    ("pyproject.toml", "Python"),
    ("setup.py", "Python"),
    ("manage.py", "Python"),
    ("*.csproj", ".NET"),
    ("*.sln", ".NET"),
    ("composer.json", "PHP"),
    ("go.mod", "Go"),
    ("Gemfile", "Ruby"),
    ("Cargo.toml", "Rust"),
    ("server.js", "Node.js"),
    ("server.ts", "Node.js"),
    ("*/pom.xml", "Java"),
    ("*/build.gradle", "Java"),
    ("*/requirements.txt", "Python"),
    ("*/pyproject.toml", "Python"),
    ("*/*.csproj", ".NET"),
    ("*/composer.json", "PHP"),
    ("*/go.mod", "Go"),
    ("*/Gemfile", "Ruby"),
    ("*/Cargo.toml", "Rust"),
    ("*/server.js", "Node.js"),
    ("*/nest-cli.json", "Node.js"),
]

_SKIP_PARTS = frozenset({"node_modules", "dist", ".git", ".angular"})

BACKEND_RECOMMENDATIONS: Dict[str, List[str]] = {
    "Java": [
        "Check REST endpoint compatibility with Spring Boot 3+",
        "Consider Spring WebFlux for reactive endpoints",
    ],
    "Python": [
        "Check API compatibility with FastAPI or Django REST Framework",
        "Consider async views for I/O-heavy endpoints",
    ],
    "Node.js": [
        "Check compatibility with Express or NestJS",
        "Consider sharing TypeScript API types between frontend and backend",
    ],
    ".NET": [
        "Check compatibility with ASP.NET Core 8+",
        "Consider Minimal APIs for lightweight endpoints",
    ],
}

COMMON_RECOMMENDATIONS = [
    "Configure CORS explicitly for frontend-backend communication",
    "Serve every frontend-backend call over HTTPS in production",
]


def detect_backend(root: Path, markers: Sequence[Marker] = BACKEND_MARKERS) -> str:
    """Label of the first marker found under *root*, else ``"unknown"``."""
    root = Path(root)
    for pattern, label in markers:
        for path in root.glob(pattern):
            if not _SKIP_PARTS.intersection(path.relative_to(root).parts):
                return label
    return UNKNOWN_BACKEND


def backend_recommendations(label: str) -> List[str]:
    """Advice for the detected backend; empty for ``unknown``."""
    if label == UNKNOWN_BACKEND:
        return []
    return BACKEND_RECOMMENDATIONS.get(label, []) + COMMON_RECOMMENDATIONS
