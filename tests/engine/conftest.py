"""Shared fixtures for engine tests."""

from __future__ import annotations

from typing import Iterable, List

import pytest

from anchor_audit.engine.config import load_config
from anchor_audit.engine.types import RawCandidate, SourceDocument, Target

ARTICLE = (
    "O marketing digital ajuda pequenas empresas a conquistar clientes novos todos os dias. "
    "Uma boa estratégia de SEO aumenta o tráfego orgânico do seu site. "
    "Para começar, clique aqui e baixe a planilha gratuita de planejamento editorial. "
    "Equipes que publicam com frequência constroem autoridade de marca no longo prazo.\n"
    "- Anúncios pagos no Google geram leads qualificados rapidamente\n"
)

MARKETING_URL = "https://blog.example.com/marketing-digital/"
SEO_URL = "https://blog.example.com/o-que-e-seo/"
PLANNING_URL = "https://blog.example.com/planejamento-editorial/"
BRANDING_URL = "https://blog.example.com/branding/"


@pytest.fixture()
def engine_config():
    """Provide a mutable copy of the default engine configuration."""

    return load_config(None)


@pytest.fixture()
def targets() -> List[Target]:
    return [
        make_target(
            MARKETING_URL,
            ["marketing digital", "estratégia online"],
            theme="Marketing Digital",
            intent="Informacional",
        ),
        make_target(SEO_URL, ["seo", "tráfego orgânico"], theme="Otimização para buscadores"),
        make_target(PLANNING_URL, ["planejamento editorial", "calendário de conteúdo"], theme="Gestão de conteúdo"),
        make_target(BRANDING_URL, ["branding", "autoridade de marca"], theme="Construção de marca"),
    ]


@pytest.fixture()
def article() -> SourceDocument:
    return make_document(ARTICLE)


def make_document(
    text: str,
    *,
    url: str = "https://blog.example.com/guia-de-conteudo",
    html: str | None = None,
) -> SourceDocument:
    return SourceDocument(url=url, text=text, html=html)


def make_target(
    url: str,
    clusters: Iterable[str] | None = None,
    *,
    theme: str | None = None,
    intent: str | None = None,
) -> Target:
    return Target(url=url, clusters=list(clusters or []), theme=theme, intent=intent)


def make_candidate(
    anchor: str,
    *,
    snippet: str = "",
    target_topic: str = "marketing digital",
    relevance_score: float = 0.9,
    target_url: str | None = None,
    note: str | None = None,
) -> RawCandidate:
    return RawCandidate(
        anchor=anchor,
        snippet=snippet,
        target_topic=target_topic,
        relevance_score=relevance_score,
        target_url=target_url,
        note=note,
    )
