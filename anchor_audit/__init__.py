"""Validation and ranking of language-model proposed internal links."""
