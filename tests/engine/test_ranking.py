"""Ranking and scoring tests."""

from __future__ import annotations

import pytest

from anchor_audit.engine import find_opportunities
from anchor_audit.engine.rank import rank_opportunities, score_reason, snippet_quality, truncate
from anchor_audit.engine.types import ValidatedOpportunity

from .conftest import BRANDING_URL, MARKETING_URL, SEO_URL, make_candidate


def _opportunity(anchor: str, relevance: float, context: str = "x" * 100) -> ValidatedOpportunity:
    return ValidatedOpportunity(
        anchor=anchor,
        context=context,
        origin_url="https://blog.example.com/guia-de-conteudo",
        destination_url=MARKETING_URL,
        score=relevance,
        reason="Topic: marketing digital",
        relevance=relevance,
    )


@pytest.mark.parametrize(
    "length, expected",
    [
        (0, 0.0),
        (20, 0.5),
        (40, 1.0),
        (100, 1.0),
        (160, 1.0),
        (260, 0.5),
        (400, 0.0),
    ],
)
def test_snippet_quality_band(engine_config, length, expected):
    assert snippet_quality("a" * length, engine_config) == pytest.approx(expected)


def test_final_score_blends_relevance_and_quality(engine_config, article, targets):
    results = find_opportunities(article, [make_candidate("marketing digital", relevance_score=0.9)], targets, engine_config)
    assert len(results) == 1
    assert results[0].score == pytest.approx(0.92)
    assert results[0].relevance == pytest.approx(0.9)


def test_ranking_orders_by_score(engine_config, article, targets):
    candidates = [
        make_candidate("marketing digital", relevance_score=0.9),
        make_candidate("autoridade de marca", target_topic="autoridade de marca", relevance_score=0.85),
        make_candidate("estratégia de SEO", target_topic="seo", relevance_score=0.95),
    ]
    results = find_opportunities(article, candidates, targets, engine_config)
    assert [item.destination_url for item in results] == [SEO_URL, MARKETING_URL, BRANDING_URL]
    assert [item.score for item in results] == pytest.approx([0.96, 0.92, 0.88])


def test_ties_keep_input_order(engine_config):
    ranked = rank_opportunities(
        [_opportunity("primeiro", 0.9), _opportunity("segundo", 0.9), _opportunity("terceiro", 0.95)],
        engine_config,
    )
    assert [item.anchor for item in ranked] == ["terceiro", "primeiro", "segundo"]


def test_custom_weights_change_the_blend(engine_config):
    engine_config.raw["weights"] = {"relevance": 1.0, "snippet_quality": 0.0}
    ranked = rank_opportunities([_opportunity("seo", 0.85, context="curto")], engine_config)
    assert ranked[0].score == pytest.approx(0.85)


def test_truncate_keeps_prefix():
    items = [_opportunity(str(index), 0.9) for index in range(4)]
    assert [item.anchor for item in truncate(items, 2)] == ["0", "1"]
    assert truncate(items, 0) == []
    assert len(truncate(items, 10)) == 4


def test_find_opportunities_respects_page_limit(engine_config, article, targets):
    engine_config.raw["max_opportunities_per_page"] = 2
    candidates = [
        make_candidate("marketing digital", relevance_score=0.9),
        make_candidate("autoridade de marca", target_topic="autoridade de marca", relevance_score=0.85),
        make_candidate("estratégia de SEO", target_topic="seo", relevance_score=0.95),
    ]
    results = find_opportunities(article, candidates, targets, engine_config)
    assert [item.anchor for item in results] == ["estratégia de SEO", "marketing digital"]


def test_reason_prefers_note_over_topic():
    assert score_reason(make_candidate("seo", note="  Pilar de SEO  ")) == "Pilar de SEO"
    assert score_reason(make_candidate("seo", target_topic="seo")) == "Topic: seo"
    assert score_reason(make_candidate("seo", target_topic="seo", note="   ")) == "Topic: seo"
