# tests/auditor/conftest.py
import pytest

from markup_auditor.dom.qngine import AuditEngine

MINIMAL_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <meta property="og:title" content="Page">
  <meta property="og:image" content="https://example.com/og.png">
  <title>Page</title>
</head>
<body>
  <header><nav><a href="/">Home</a></nav></header>
  <main>
    <h1>Welcome</h1>
    <p>Hello there.</p>
  </main>
  <footer>Footer</footer>
</body>
</html>
"""


def _wrap_body(body: str, lang: str = "en") -> str:
    """A complete document around `body`, so only the body under test produces findings."""
    return f"""<!DOCTYPE html>
<html lang="{lang}">
<head>
<meta name="viewport" content="width=device-width">
<meta property="og:title" content="T">
<meta property="og:image" content="i.png">
<title>Test</title>
</head>
<body>
{body}
</body>
</html>
"""


@pytest.fixture
def wrap_body():
    return _wrap_body


@pytest.fixture
def minimal_html():
    return MINIMAL_HTML


@pytest.fixture
def engine():
    """An engine with built-in defaults, independent of settings.json."""
    return AuditEngine(settings={})


@pytest.fixture
def audit(engine):
    """Runs the engine and returns the named category."""
    def _audit(raw_html: str, category: str):
        return engine.run(raw_html).get_category(category)
    return _audit
