#!/usr/bin/env python3
"""
wiktglot - Translate words through English Wiktionary.

Usage:
    wiktglot lookup bonjour --from fr --to en
    wiktglot lookup cat --from en --to ar --json
    wiktglot lookup eating --from en --to es --rate 5/1 -v
    wiktglot search annyeonghaseyo --lang ko
    wiktglot languages

Exit status: 0 on success, 1 when the word is not found or a request fails,
2 for an invalid language pair or configuration.
"""

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import orjson
from rich import box
from rich.console import Console
from rich.table import Table

from wiktglot.config import LookupConfig, parse_rate
from wiktglot.errors import ConfigurationError, WiktglotError
from wiktglot.languages import LANGUAGES, PIVOT_TAG
from wiktglot.models import LookupResult, TranslationEntry
from wiktglot.resolver import Resolver

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def load_config(args: argparse.Namespace) -> LookupConfig:
    """Config file (or defaults) + environment, then command-line overrides."""
    if getattr(args, 'config', None):
        config = LookupConfig.from_yaml(args.config)
    else:
        config = LookupConfig.from_env()

    overrides = {}
    if getattr(args, 'timeout', None) is not None:
        overrides['timeout'] = args.timeout
    if getattr(args, 'rate', None):
        overrides['rate_limit_requests'], overrides['rate_limit_window'] = parse_rate(args.rate)
    return replace(config, **overrides) if overrides else config


def _notes(entry: TranslationEntry) -> str:
    notes = []
    if entry.dialect:
        notes.append(entry.dialect)
    if entry.inflection is not None:
        forms = entry.inflection.to_dict()
        forms.pop('kind')
        notes.append(', '.join(forms.values()))
    return '; '.join(notes)


def render_result(result: LookupResult, console: Console) -> None:
    """Print a lookup result as one table per group."""
    header = f"[bold]{result.word}[/bold] ({result.source_language} → {result.target_language})"
    if result.headword_transliteration:
        header += f"  [italic]{result.headword_transliteration}[/italic]"
    if result.pronunciation:
        header += f"  {result.pronunciation}"
    console.print(header)

    if result.correction:
        console.print(
            f"[yellow]Showing results for {result.correction.resolved} "
            f"(searched for {result.correction.queried})[/yellow]"
        )

    if not result.groups:
        console.print("[dim]No translations found.[/dim]")
        return

    for group in result.groups:
        title = group.part_of_speech
        if group.morphological_form:
            form = group.morphological_form
            title += f" ({form.description} of {form.base_lexeme})"

        table = Table(title=title, title_justify="left", box=box.SIMPLE)
        table.add_column("Translation", style="cyan")
        table.add_column("Transliteration", style="magenta")
        table.add_column("Gloss")
        table.add_column("Notes", style="dim")
        for entry in group.entries:
            table.add_row(entry.surface_form, entry.transliteration or "", entry.gloss, _notes(entry))
        console.print(table)


def print_json(data) -> None:
    print(orjson.dumps(data, option=orjson.OPT_INDENT_2).decode())


# ─────────────────────────────────────────────────────────────────────────────
# Commands
# ─────────────────────────────────────────────────────────────────────────────

async def _lookup(args: argparse.Namespace, config: LookupConfig) -> LookupResult:
    async with Resolver(config) as resolver:
        return await resolver.resolve(args.word, args.source, args.target)


async def _search(args: argparse.Namespace, config: LookupConfig) -> List[str]:
    async with Resolver(config) as resolver:
        return await resolver.search_by_romanization(args.text, args.lang)


def cmd_lookup(args: argparse.Namespace) -> int:
    config = load_config(args)
    result = asyncio.run(_lookup(args, config))
    if args.json:
        print_json(result.to_dict())
    else:
        render_result(result, Console())
    return EXIT_OK


def cmd_search(args: argparse.Namespace) -> int:
    config = load_config(args)
    titles = asyncio.run(_search(args, config))
    if args.json:
        print_json(titles)
    else:
        for title in titles:
            print(title)
    return EXIT_OK


def cmd_languages(args: argparse.Namespace) -> int:
    table = Table(box=box.SIMPLE)
    table.add_column("Tag", style="cyan")
    table.add_column("Name")
    table.add_column("Script-based")
    for language in LANGUAGES.values():
        name = language.name
        if language.tag == PIVOT_TAG:
            name += " (pivot)"
        table.add_row(language.tag, name, "yes" if language.script_based else "")
    Console().print(table)
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )
    common.add_argument(
        '--config',
        type=Path,
        help='YAML file with lookup settings'
    )

    parser = argparse.ArgumentParser(
        prog='wiktglot',
        description='Translate words through English Wiktionary',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # French to English
  wiktglot lookup bonjour --from fr --to en

  # English to Arabic, as JSON
  wiktglot lookup cat --from en --to ar --json

  # Find a Korean word from its romanization
  wiktglot search annyeonghaseyo --lang ko
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    lookup = subparsers.add_parser('lookup', parents=[common], help='Translate a word')
    lookup.add_argument('word', help='Word to look up')
    lookup.add_argument('--from', dest='source', required=True, help='Source language tag')
    lookup.add_argument('--to', dest='target', required=True, help='Target language tag')
    lookup.add_argument('--json', action='store_true', help='Print the result as JSON')
    lookup.add_argument('--timeout', type=float, help='Per-request timeout in seconds')
    lookup.add_argument('--rate', metavar='N/SECONDS', help='Allow at most N requests per window')
    lookup.set_defaults(func=cmd_lookup)

    search = subparsers.add_parser('search', parents=[common], help='Find titles for a romanization')
    search.add_argument('text', help='Romanized text')
    search.add_argument('--lang', help="Keep only titles in this language's script")
    search.add_argument('--json', action='store_true', help='Print titles as a JSON list')
    search.set_defaults(func=cmd_search)

    languages = subparsers.add_parser('languages', parents=[common], help='List supported language tags')
    languages.set_defaults(func=cmd_languages)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    try:
        return args.func(args)
    except ConfigurationError as e:
        logger.error(e.message)
        return EXIT_CONFIG
    except WiktglotError as e:
        logger.error(e.message)
        return EXIT_FAILED


if __name__ == '__main__':
    sys.exit(main())
