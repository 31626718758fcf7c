"""
Command-line interface entry points for wiktglot.

Entry points:
- wiktglot lookup: Translate a word through English Wiktionary
- wiktglot search: Find titles for a romanization
- wiktglot languages: List supported language tags
"""
