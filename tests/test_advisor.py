# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for keyword-driven remediation advice."""

from __future__ import annotations

from seccheck.advisor import (
    CATEGORY_RECOMMENDATIONS,
    GENERAL_HEADER,
    GENERAL_RECOMMENDATIONS,
    annotate,
)

GENERAL_BLOCK = [GENERAL_HEADER, *(f"- {text}" for text in GENERAL_RECOMMENDATIONS)]


def test_no_keywords_yields_only_general_block() -> None:
    advisory = annotate("No issues identified.\n")

    assert advisory.categories == ()
    assert advisory.render() == GENERAL_BLOCK


def test_repeated_label_is_reported_once() -> None:
    text = "line 1: XSS\nline 9: XSS again\nXSS"

    lines = annotate(text).render()

    expected = f"Recommendation: {CATEGORY_RECOMMENDATIONS['XSS']}"
    assert lines.count(expected) == 1
    assert lines == [expected, *GENERAL_BLOCK]


def test_label_position_does_not_matter() -> None:
    assert annotate("XSS at start").categories == ("XSS",)
    assert annotate("ends with XSS").categories == ("XSS",)


def test_categories_follow_table_order_not_input_order() -> None:
    advisory = annotate("first CSRF token missing\nthen SQL Injection risk\n")

    assert advisory.categories == ("SQL Injection", "CSRF")
    assert advisory.render()[:2] == [
        "Recommendation: Use parameterized queries to prevent SQL Injection.",
        "Recommendation: Implement CSRF protection to prevent Cross-Site Request Forgery (CSRF).",
    ]


def test_matching_is_case_sensitive() -> None:
    assert annotate("possible sql injection and xss").categories == ()


def test_every_label_is_detected() -> None:
    text = " ".join(reversed(list(CATEGORY_RECOMMENDATIONS)))

    advisory = annotate(text)

    assert advisory.categories == tuple(CATEGORY_RECOMMENDATIONS)
    assert len(advisory.render()) == len(CATEGORY_RECOMMENDATIONS) + 4
