# tests/auditor/test_locator.py
from bs4 import BeautifulSoup

from markup_auditor.dom.builder import DOMBuilder
from markup_auditor.dom.locator import LocationResolver, TokenSearchStrategy, SourcePositionStrategy


def _soup(raw):
    return BeautifulSoup(raw, "html5lib", multi_valued_attributes=None)


def test_token_priority():
    strategy = TokenSearchStrategy()
    soup = _soup('<img id="hero" class="wide" src="a.png"><p class="x y">t</p><img src="b.png"><span>s</span>')
    img, p, img2, span = soup.body.find_all(True)

    assert strategy.search_token(img) == 'id="hero"'
    assert strategy.search_token(p) == 'class="x y"'
    assert strategy.search_token(img2) == 'src="b.png"'
    assert strategy.search_token(span) == '<span'


def test_empty_id_falls_through_to_class():
    soup = _soup('<div id="" class="card">x</div>')
    assert TokenSearchStrategy().search_token(soup.div) == 'class="card"'


def test_line_number_and_snippet():
    raw = '<html>\n<body>\n  <img src="logo.png">\n</body>\n</html>'
    location = LocationResolver().locate(raw, _soup(raw).img)
    assert location.line == 3
    assert location.snippet == '<img src="logo.png">'
    assert location.found


def test_first_occurrence_wins():
    # The token of the second element also matches the first one: the
    # reported line is the first match, which is a known approximation.
    raw = '<p id="dup">one</p>\n<p id="dup">two</p>'
    second = _soup(raw).find_all('p')[1]
    assert LocationResolver().locate(raw, second).line == 1


def test_long_lines_are_truncated():
    raw = '    <p id="long">' + "x" * 100 + '</p>    '
    location = LocationResolver().locate(raw, _soup(raw).p)
    assert location.snippet.endswith("...")
    assert len(location.snippet) == 63
    assert location.snippet.startswith('<p id="long">')


def test_short_lines_are_not_marked():
    raw = '<p id="a">' + "x" * 40 + '</p>'
    location = LocationResolver().locate(raw, _soup(raw).p)
    assert not location.snippet.endswith("...")


def test_not_found_returns_empty_location():
    # Single quotes in the source never match the double-quoted token
    raw = "<p id='single'>x</p>"
    location = LocationResolver().locate(raw, _soup(raw).p)
    assert location.line is None
    assert location.snippet is None
    assert not location.found


def test_missing_element_returns_empty_location():
    assert not LocationResolver().locate("<p>x</p>", None).found


def test_strategy_failures_are_downgraded():
    class Broken:
        name = "broken"

        def find_line(self, raw_html, element):
            raise RuntimeError("boom")

    raw = "<p>x</p>"
    location = LocationResolver(strategy=Broken()).locate(raw, _soup(raw).p)
    assert not location.found


def test_source_strategy_uses_parser_lines():
    raw = '<p id="dup">one</p>\n<p id="dup">two</p>'
    second = _soup(raw).find_all('p')[1]
    resolver = LocationResolver(strategy=SourcePositionStrategy())
    location = resolver.locate(raw, second)
    assert location.line == 2
    assert location.snippet == '<p id="dup">two</p>'


def test_source_strategy_falls_back_to_token_search():
    raw = '<p class="c">x</p>'
    element = _soup(raw).p
    element.sourceline = None
    location = LocationResolver(strategy=SourcePositionStrategy()).locate(raw, element)
    assert location.line == 1


def test_from_settings():
    resolver = LocationResolver.from_settings("source", 40)
    assert isinstance(resolver.strategy, SourcePositionStrategy)
    assert resolver.snippet_length == 40


def test_class_spacing_is_kept_verbatim():
    raw = '<p>a</p>\n<div class="card  wide">x</div>'
    element = _soup(raw).div
    assert TokenSearchStrategy().search_token(element) == 'class="card  wide"'

    location = LocationResolver().locate(raw, element)
    assert location.line == 2
    assert location.snippet == '<div class="card  wide">x</div>'


def test_built_tree_locates_tab_separated_classes():
    raw = '<main>\n<p>a</p>\n<div class="card\twide">x</div>\n</main>'
    tree = DOMBuilder().parse_doc(raw)
    assert tree.locate(tree.find('div')).line == 3
