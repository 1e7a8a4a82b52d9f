"""Topic overlap detection tests."""

from __future__ import annotations

import pytest

from anchor_audit.engine.cannibalization import cluster_similarity, detect_cannibalization

from .conftest import make_target

PAGE_A = make_target("https://blog.example.com/a", ["SEO", "tráfego orgânico", "link building"], intent="Informacional")
PAGE_B = make_target("https://blog.example.com/b", ["seo", "tráfego orgânico", "conteúdo"], intent="Comercial")
PAGE_C = make_target("https://blog.example.com/c", ["receitas"], intent="Informacional")
PAGE_D = make_target("https://blog.example.com/d", ["seo", "email", "ads"], intent="informacional")


def test_cluster_similarity_uses_larger_set():
    assert cluster_similarity(PAGE_A, PAGE_B) == pytest.approx(2 / 3)
    assert cluster_similarity(PAGE_A, PAGE_C) == 0.0
    assert cluster_similarity(make_target("https://x.com"), make_target("https://y.com")) == 0.0


def test_detects_competing_pages():
    reports = {report.url: report for report in detect_cannibalization([PAGE_A, PAGE_B, PAGE_C, PAGE_D])}

    assert set(reports) == {PAGE_A.url, PAGE_B.url, PAGE_D.url}
    assert reports[PAGE_A.url].competitors == [PAGE_B.url, PAGE_D.url]
    assert reports[PAGE_A.url].score == pytest.approx(2 / 3)
    assert reports[PAGE_B.url].competitors == [PAGE_A.url]
    assert reports[PAGE_D.url].competitors == [PAGE_A.url]
    assert reports[PAGE_D.url].score == pytest.approx(1 / 3)


def test_weak_overlap_needs_same_intent():
    commercial_d = make_target(PAGE_D.url, PAGE_D.clusters, intent="Comercial")
    assert detect_cannibalization([PAGE_A, commercial_d]) == []
