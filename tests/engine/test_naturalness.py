"""Naturalness heuristics tests."""

from __future__ import annotations

import pytest

from anchor_audit.engine.naturalness import is_natural_sentence


@pytest.mark.parametrize(
    "snippet",
    [
        "",
        "   ",
        "Home | Blog | Contato | Sobre nós",
        "SEO • Ads • Social • E-mail marketing",
        '{"anchor": "marketing digital", "score": 1}',
        "[Guia completo de marketing digital]",
        "(veja a tabela de preços abaixo)",
        "function track(event) { return event.name; }",
        "const total = items.length + 1 para o carrinho",
        "12/03/2024 - 15:30",
        "Curto demais.",
        "Fig. 2 Evolução do tráfego orgânico em 2024",
        "Vídeo 1: como configurar o Google Analytics",
        "Veja o diagrama completo em diagrama-final.png",
    ],
)
def test_rejects_layout_code_and_captions(snippet):
    assert not is_natural_sentence(snippet)


def test_accepts_editorial_sentence():
    assert is_natural_sentence("O marketing digital ajuda pequenas empresas a crescer online.")


def test_single_separator_is_tolerated():
    assert is_natural_sentence("Planos de SEO | escolha o que cabe no seu orçamento.")


def test_minimum_length_is_configurable():
    assert not is_natural_sentence("Frase curta mas ok.")
    assert is_natural_sentence("Frase curta mas ok.", min_length=10)
