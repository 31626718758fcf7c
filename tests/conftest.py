"""Pytest configuration and shared fixtures.

Pages are trimmed copies of what action=parse returns for real entries:
the heading, list and table markup is kept as rendered, most prose is cut.
"""
import pytest

from wiktglot.client import Page
from wiktglot.config import LookupConfig
from wiktglot.errors import NotFoundError
from wiktglot.markup import normalize_title
from wiktglot.resolver import Resolver


def h(rank, anchor, label=None):
    """A rendered heading as the current skin wraps it."""
    return (
        f'<div class="mw-heading mw-heading{rank}">'
        f'<h{rank} id="{anchor}">{label or anchor.replace("_", " ")}</h{rank}></div>\n'
    )


def page(*parts):
    return '<div class="mw-content-ltr mw-parser-output" lang="en" dir="ltr">\n' + ''.join(parts) + '</div>'


# ─────────────────────────────────────────────────────────────────────────────
# Foreign-language pages
# ─────────────────────────────────────────────────────────────────────────────

BONJOUR = page(
    h(2, "French"),
    h(3, "Etymology"),
    '<p>From <i class="Latn mention" lang="fr"><a href="/wiki/bon#French">bon</a></i> + '
    '<i class="Latn mention" lang="fr"><a href="/wiki/jour#French">jour</a></i>.</p>\n',
    h(3, "Pronunciation"),
    '<ul><li><a href="/wiki/Wiktionary:International_Phonetic_Alphabet">IPA</a><sup>(key)</sup>: '
    '<span class="IPA">/bɔ̃.ʒuʁ/</span></li></ul>\n',
    h(3, "Noun"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="fr">bonjour</strong>'
    '&nbsp;<span class="gender"><abbr title="masculine gender">m</abbr></span></span></p>\n'
    '<ol><li><a href="/wiki/greeting">greeting</a></li></ol>\n',
    h(3, "Interjection"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="fr">bonjour</strong></span></p>\n'
    '<ol><li><a href="/wiki/hello">hello</a>, <a href="/wiki/good_morning">good morning</a>, '
    '<a href="/wiki/good_afternoon">good afternoon</a>'
    '<dl><dd><span class="nyms synonym">Synonym: <span class="Latn" lang="fr">'
    '<a href="/wiki/salut#French">salut</a></span></span></dd></dl></li></ol>\n',
    h(2, "Middle_French"),
    h(3, "Interjection"),
    '<ol><li><a href="/wiki/good_day">good day</a></li></ol>\n',
)

CIAO = page(
    h(2, "Italian"),
    h(3, "Pronunciation"),
    '<ul><li><span class="IPA">/ˈt͡ʃa.o/</span></li></ul>\n',
    h(3, "Interjection"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="it">ciao</strong></span></p>\n'
    '<ol><li><span class="usage-label-sense"><span class="ib-brac">(</span>'
    '<span class="ib-content">informal</span><span class="ib-brac">)</span></span> '
    '<a href="/wiki/hello">hello</a>, <a href="/wiki/goodbye">goodbye</a>'
    '<dl><dd><span class="nyms synonym">Synonyms: <a href="/wiki/buongiorno#Italian">buongiorno</a>, '
    '<a href="/wiki/arrivederci#Italian">arrivederci</a></span></dd></dl>'
    '<ul><li><i>Ciao, come stai?</i> ― <a href="/wiki/hi">Hi</a>, how are you?</li></ul></li></ol>\n',
)

AZUCAR = page(
    h(2, "Spanish"),
    h(3, "Pronunciation"),
    '<ul><li>IPA: <span class="IPA">/aˈθukaɾ/</span></li></ul>\n',
    h(3, "Noun"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="es">azúcar</strong> '
    '<span class="gender"><abbr>m or f</abbr></span></span></p>\n'
    '<ol><li><a href="/wiki/sugar">sugar</a></li></ol>\n',
)

# An existing page with nothing Spanish on it
REVOLUCION = page(
    h(2, "Esperanto"),
    h(3, "Noun"),
    '<ol><li><a href="/wiki/revolution">revolution</a></li></ol>\n',
)

REVOLUCION_ACCENTED = page(
    h(2, "Spanish"),
    h(3, "Noun"),
    '<ol><li><a href="/wiki/revolution">revolution</a></li></ol>\n',
)

COMIDO = page(
    h(2, "Spanish"),
    h(3, "Participle"),
    '<ol><li><span class="form-of-definition use-with-mention">'
    '<a href="/wiki/Appendix:Glossary#past_participle">past participle</a> of '
    '<span class="form-of-definition-link"><i class="Latn mention" lang="es">'
    '<a href="/wiki/comer#Spanish" title="comer">comer</a></i></span></span></li></ol>\n',
)

COMER = page(
    h(2, "Spanish"),
    h(3, "Verb"),
    '<ol><li><a href="/wiki/eat">to eat</a></li>'
    '<li><a href="/wiki/have_lunch">to have lunch</a></li></ol>\n',
)

AMO = page(
    h(2, "Latin"),
    h(3, "Verb"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="la">amō</strong> '
    '(<i>present infinitive</i> <b class="Latn form-of lang-la" lang="la"><a href="/wiki/amare#Latin">amāre</a></b>, '
    '<i>perfect active</i> <b class="Latn form-of lang-la" lang="la"><a href="/wiki/amavi#Latin">amāvī</a></b>, '
    '<i>supine</i> <b class="Latn form-of lang-la" lang="la"><a href="/wiki/amatum#Latin">amātum</a></b>); '
    '<a href="/wiki/Appendix:Latin_first_conjugation">first conjugation</a></span></p>\n'
    '<ol><li>I <a href="/wiki/love">love</a>, <a href="/wiki/like">like</a></li></ol>\n',
)

AQUA = page(
    h(2, "Latin"),
    h(3, "Noun"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="la">aqua</strong>&nbsp;'
    '<span class="gender"><abbr title="feminine gender">f</abbr></span> '
    '(<i>genitive</i> <b class="Latn" lang="la"><a href="/wiki/aquae#Latin">aquae</a></b>); '
    '<a href="/wiki/Appendix:Latin_first_declension">first declension</a></span></p>\n'
    '<ol><li><a href="/wiki/water">water</a></li></ol>\n',
)

BONUS = page(
    h(2, "Latin"),
    h(3, "Adjective"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="la">bonus</strong> '
    '(<i>feminine</i> <b class="Latn" lang="la"><a href="/wiki/bona#Latin">bona</a></b>, '
    '<i>neuter</i> <b class="Latn" lang="la"><a href="/wiki/bonum#Latin">bonum</a></b>, '
    '<i>comparative</i> <b class="Latn" lang="la"><a href="/wiki/melior#Latin">melior</a></b>); '
    '<a href="/wiki/Appendix:Latin_first/second_declension">first/second-declension</a> adjective</span></p>\n'
    '<ol><li><a href="/wiki/good">good</a>, <a href="/wiki/honest">honest</a></li></ol>\n',
)

MARHABAN = page(
    h(2, "Arabic"),
    h(3, "Pronunciation"),
    '<ul><li>IPA: <span class="IPA">/mar.ħa.ban/</span></li></ul>\n',
    h(3, "Interjection"),
    '<p><span class="headword-line"><strong class="Arab headword" lang="ar">مَرْحَبًا</strong> • '
    '(<span lang="ar-Latn" class="headword-tr tr Latn" dir="ltr">marḥaban</span>)</span></p>\n'
    '<ol><li><a href="/wiki/hello">hello</a>, <a href="/wiki/welcome">welcome</a></li></ol>\n',
)

ANNYEONG = page(
    h(2, "Korean"),
    h(3, "Interjection"),
    '<p><span class="headword-line"><strong class="Kore headword" lang="ko">안녕</strong> '
    '(<span class="romanization">annyeong</span>)</span></p>\n'
    '<ol><li><a href="/wiki/hi">hi</a>, <a href="/wiki/bye">bye</a></li></ol>\n',
)

TABERU = page(
    h(2, "Japanese"),
    h(3, "Verb"),
    '<p><span class="headword-line"><strong class="Jpan headword" lang="ja">食べる</strong> '
    '<span lang="ja-Latn">ichidan</span></span></p>\n'
    '<ol><li>to <a href="/wiki/eat">eat</a></li></ol>\n',
)

KONNICHIWA = page(
    h(2, "Japanese"),
    '<table class="wikitable ja-see"><tbody>'
    '<tr><th>For pronunciation and definitions of <b>こんにちは</b> – see '
    '<a href="/wiki/%E4%BB%8A%E6%97%A5%E3%81%AF#Japanese">今日は</a>.</th></tr>'
    '<tr><td><span class="Jpan" lang="ja"><a href="/wiki/%E4%BB%8A%E6%97%A5%E3%81%AF#Japanese">今日は</a></span>: '
    '<dl><dd><span class="ja-see-pos">[interjection]</span> <a href="/wiki/hello">hello</a>, '
    '<a href="/wiki/good_afternoon">good afternoon</a></dd></dl></td></tr>'
    '</tbody></table>\n',
)

XIEXIE = page(
    h(2, "Chinese"),
    '<table class="wikitable zh-see"><tbody><tr><td>For pronunciation and definitions of '
    '<b>谢谢</b> – see <a href="/wiki/%E8%AC%9D%E8%AC%9D#Chinese">謝謝</a> '
    '("<a href="/wiki/thanks">thanks</a>; <a href="/wiki/thank_you">thank you</a>").<br>'
    '(This term is the <a href="/wiki/Simplified_Chinese">simplified</a> form of 謝謝.)'
    '</td></tr></tbody></table>\n',
)

GOU = page(
    h(2, "Chinese"),
    h(3, "Etymology"),
    '<p>From Old Chinese.</p>\n',
    h(4, "Definitions"),
    '<ol><li><a href="/wiki/dog">dog</a> <span>(<a href="/wiki/Classifier:%E9%9A%BB">Classifier</a>: '
    '<a href="/wiki/%E9%9A%BB">隻</a>)</span></li>'
    '<li><span class="usage-label-sense">(<i>derogatory</i>)</span> '
    '<a href="/wiki/lackey">lackey</a>; <a href="/wiki/henchman">henchman</a></li></ol>\n',
)


# ─────────────────────────────────────────────────────────────────────────────
# English pages
# ─────────────────────────────────────────────────────────────────────────────

def nav_frame(gloss, rows):
    return (
        '<div class="NavFrame" id="Translations-x"><div class="NavHead" style="text-align:left">'
        f'{gloss}</div><div class="NavContent"><table class="translations"><tbody><tr><td>'
        f'<ul>{rows}</ul></td></tr></tbody></table></div></div>\n'
    )


EAT = page(
    h(2, "English"),
    h(3, "Pronunciation"),
    '<ul><li><span class="IPA">/iːt/</span></li></ul>\n',
    h(3, "Verb"),
    '<ol><li>To <a href="/wiki/ingest">ingest</a>; to be ingested.</li></ol>\n',
    h(4, "Translations"),
    nav_frame(
        'to ingest',
        '<li>Spanish: <span class="Latn" lang="es"><a href="/wiki/comer#Spanish">comer</a></span>, '
        '<span class="Latn" lang="es"><a href="/wiki/ingerir#Spanish">ingerir</a></span></li>'
        '<li>French: <span class="Latn" lang="fr"><a href="/wiki/manger#French">manger</a></span></li>'
        '<li>Arabic: <span class="Arab" lang="ar"><a href="/wiki/%D8%A3%D9%83%D9%84#Arabic">أَكَلَ</a></span> '
        '(<span lang="ar-Latn" class="tr Latn">ʔakala</span>)</li>',
    ),
    nav_frame(
        'Translations to be checked',
        '<li>Spanish: <span class="Latn" lang="es"><a href="/wiki/zampar#Spanish">zampar</a></span></li>',
    ),
)

EATING = page(
    h(2, "English"),
    h(3, "Pronunciation"),
    '<ul><li><span class="IPA">/ˈiːtɪŋ/</span></li></ul>\n',
    h(3, "Verb"),
    '<p><span class="headword-line"><strong class="Latn headword" lang="en">eating</strong></span></p>\n'
    '<ol><li><span class="form-of-definition use-with-mention">'
    '<a href="/wiki/Appendix:Glossary#present_participle">present participle</a> and '
    '<a href="/wiki/Appendix:Glossary#gerund">gerund</a> of '
    '<span class="form-of-definition-link"><i class="Latn mention" lang="en">'
    '<a href="/wiki/eat#English" title="eat">eat</a></i></span></span></li></ol>\n',
    h(3, "Noun"),
    '<ol><li>The action of the verb <i>to eat</i>.</li></ol>\n',
    h(4, "Translations"),
    nav_frame(
        'the action of the verb to eat',
        '<li>French: <span class="Latn" lang="fr"><a href="/wiki/manger#French">manger</a></span></li>',
    ),
)

CAT = page(
    h(2, "English"),
    h(3, "Etymology_1", "Etymology 1"),
    h(4, "Noun"),
    '<ol><li>A <a href="/wiki/mammal">mammal</a> of the family Felidae.</li></ol>\n',
    h(5, "Translations"),
    '<div class="pseudo NavFrame"><div class="NavHead" style="text-align:left">See '
    '<a href="/wiki/cat/translations#Noun" title="cat/translations">cat/translations §&nbsp;Noun</a>.'
    '</div></div>\n',
    h(4, "Verb"),
    '<ol><li>To <a href="/wiki/hoist">hoist</a> the anchor.</li></ol>\n',
    h(5, "Translations_2", "Translations"),
    nav_frame(
        'to hoist the anchor',
        '<li>French: <span class="Latn" lang="fr"><a href="/wiki/caponner#French">caponner</a></span></li>',
    ),
    h(2, "Tagalog"),
    h(3, "Noun"),
    '<ol><li><a href="/wiki/cat">cat</a></li></ol>\n',
)

CAT_TRANSLATIONS = page(
    h(2, "English"),
    h(3, "Noun"),
    nav_frame(
        'domestic species',
        '<li>French: <span class="Latn" lang="fr"><a href="/wiki/chat#French">chat</a></span> '
        '<span class="gender"><abbr title="masculine gender">m</abbr></span>, '
        '<span class="Latn" lang="fr"><a href="/wiki/chatte#French">chatte</a></span> '
        '<span class="gender"><abbr title="feminine gender">f</abbr></span></li>'
        '<li>Chinese:<dl>'
        '<dd>Cantonese: <span class="Hani" lang="yue"><a href="/wiki/%E8%B2%93#Chinese">貓</a></span> '
        '(<span lang="yue-Latn" class="tr Latn">maau1</span>)</dd>'
        '<dd>Mandarin: <span class="Hani" lang="cmn"><a href="/wiki/%E8%B2%93#Chinese">貓</a></span> '
        '(<span lang="cmn-Latn" class="tr Latn">māo</span>)</dd>'
        '</dl></li>'
        '<li>Arabic: <span class="Arab" lang="ar"><a href="/wiki/%D9%82%D8%B7#Arabic">قِطّ</a></span> '
        '<span class="gender"><abbr title="masculine gender">m</abbr></span> '
        '(<span lang="ar-Latn" class="tr Latn">qiṭṭ</span>)</li>',
    ),
    h(3, "Verb"),
    nav_frame(
        'to vomit',
        '<li>French: <span class="Latn" lang="fr"><a href="/wiki/d%C3%A9gueuler#French">dégueuler</a></span></li>',
    ),
)


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

PAGES = {
    "bonjour": BONJOUR,
    "ciao": CIAO,
    "azúcar": AZUCAR,
    "revolucion": REVOLUCION,
    "revolución": REVOLUCION_ACCENTED,
    "comido": COMIDO,
    "comer": COMER,
    "amo": AMO,
    "aqua": AQUA,
    "bonus": BONUS,
    "مرحبا": MARHABAN,
    "안녕": ANNYEONG,
    "食べる": TABERU,
    "こんにちは": KONNICHIWA,
    "谢谢": XIEXIE,
    "狗": GOU,
    "eat": EAT,
    "eating": EATING,
    "cat": CAT,
    "cat/translations": CAT_TRANSLATIONS,
}

SEARCH_RESULTS = {
    "azucar": ["azúcar", "azucarar", "azúcar moreno"],
    "revolucion": ["revolucion", "revolución", "revolucionario"],
}


class FakeClient:
    """In-memory stand-in for WiktionaryClient that records every call."""

    def __init__(self, pages=None, search_results=None, errors=None, search_errors=None):
        self.pages = {normalize_title(k): v for k, v in (pages or {}).items()}
        self.search_results = search_results or {}
        self.errors = errors or {}
        self.search_errors = search_errors or {}
        self.fetched = []
        self.searched = []
        self.closed = False

    @property
    def calls(self):
        return len(self.fetched) + len(self.searched)

    async def fetch_page(self, title):
        title = normalize_title(title)
        self.fetched.append(title)
        if title in self.errors:
            raise self.errors[title]
        if title not in self.pages:
            raise NotFoundError(title)
        return Page(body=self.pages[title], title=title.replace('_', ' '))

    async def search(self, text, limit=None):
        self.searched.append(text)
        if text in self.search_errors:
            raise self.search_errors[text]
        results = list(self.search_results.get(text, []))
        return results[:limit] if limit else results

    async def aclose(self):
        self.closed = True


@pytest.fixture
def pages():
    """Every sample page keyed by title."""
    return dict(PAGES)


@pytest.fixture
def make_client():
    """Factory for a FakeClient over the sample pages (overrides merged in)."""
    def factory(extra_pages=None, search_results=None, errors=None, search_errors=None):
        merged = dict(PAGES)
        merged.update(extra_pages or {})
        results = dict(SEARCH_RESULTS)
        results.update(search_results or {})
        return FakeClient(merged, results, errors, search_errors)
    return factory


@pytest.fixture
def fake_client(make_client):
    return make_client()


@pytest.fixture
def resolver(fake_client):
    """Resolver wired to the in-memory client, pacing off."""
    return Resolver(LookupConfig(), client=fake_client)
