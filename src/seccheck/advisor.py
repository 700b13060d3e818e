# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Keyword-driven remediation advice for analyzer output."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

# Iteration order of this table is the order recommendations are printed in.
CATEGORY_RECOMMENDATIONS: Final[Mapping[str, str]] = MappingProxyType(
    {
        "SQL Injection": "Use parameterized queries to prevent SQL Injection.",
        "XSS": "Sanitize user inputs to prevent Cross-Site Scripting (XSS).",
        "Command Injection": "Validate and sanitize user inputs to prevent Command Injection.",
        "Path Traversal": "Validate file paths and restrict file access to prevent Path Traversal.",
        "CSRF": "Implement CSRF protection to prevent Cross-Site Request Forgery (CSRF).",
        "Buffer Overflow": "Use safe functions and perform bounds checking to prevent Buffer Overflow.",
        "Insecure Transport": "Use TLS/SSL to encrypt data in transit and avoid using insecure protocols.",
        "Weak Cryptography": "Use strong, industry-standard cryptographic algorithms and libraries.",
        "Unvalidated Redirects and Forwards": "Validate URLs and use safe methods to handle redirects and forwards.",
        "Security Misconfiguration": "Ensure secure configuration for servers, database, and application framework.",
        "Sensitive Data Exposure": (
            "Encrypt sensitive data at rest and in transit, and use secure storage mechanisms."
        ),
        "Improper Access Control": (
            "Implement proper authentication and authorization checks to prevent unauthorized access."
        ),
    },
)

GENERAL_RECOMMENDATIONS: Final[tuple[str, ...]] = (
    "Keep dependencies up to date to avoid known vulnerabilities.",
    "Implement proper error handling to avoid leaking sensitive information.",
    "Regularly perform security testing and code reviews.",
)

RECOMMENDATION_PREFIX: Final[str] = "Recommendation: "
GENERAL_HEADER: Final[str] = "General Recommendation:-"


@dataclass(frozen=True, slots=True)
class Advisory:
    """Category labels found in analyzer output, in table order."""

    categories: tuple[str, ...] = ()

    @property
    def recommendations(self) -> tuple[str, ...]:
        return tuple(CATEGORY_RECOMMENDATIONS[label] for label in self.categories)

    def render(self) -> list[str]:
        """Return the printable advice lines, general block included."""

        lines = [f"{RECOMMENDATION_PREFIX}{text}" for text in self.recommendations]
        lines.append(GENERAL_HEADER)
        lines.extend(f"- {text}" for text in GENERAL_RECOMMENDATIONS)
        return lines


def annotate(text: str) -> Advisory:
    """Return the categories whose label occurs in ``text`` (case-sensitive)."""

    return Advisory(categories=tuple(label for label in CATEGORY_RECOMMENDATIONS if label in text))


__all__ = [
    "CATEGORY_RECOMMENDATIONS",
    "GENERAL_HEADER",
    "GENERAL_RECOMMENDATIONS",
    "RECOMMENDATION_PREFIX",
    "Advisory",
    "annotate",
]
