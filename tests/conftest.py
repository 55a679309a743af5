"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

POST_URL = "https://example.com/blog/ownership"
DREAMWIDTH_URL = "https://someone.dreamwidth.org/1234.html"

ARTICLE_PAGE = """<!DOCTYPE html>
<html lang="en">
<head><title>Ownership | Example Blog</title></head>
<body>
<nav><ul><li><a href="/">Home</a></li><li><a href="/about">About</a></li></ul></nav>
<main>
  <article>
    <h1>Understanding Ownership</h1>
    <p>Every value has a single owner.</p>
    <ul>
      <li>Moves transfer ownership</li>
      <li><p>Borrows do not</p></li>
    </ul>
    <blockquote>Shared XOR mutable<p>is the rule</p></blockquote>
    <pre><code>let s = String::new();</code></pre>
    <hr>
    <h2>Further reading</h2>
    <ol><li><a href="/book">The Book</a></li></ol>
  </article>
</main>
<footer><p>Copyright</p></footer>
</body>
</html>"""

MISSING_H1_PAGE = """<html><body>
<header><h1>The Real Title</h1></header>
<article>
  <h2>Introduction</h2>
  <p>Body text.</p>
</article>
</body></html>"""

DREAMWIDTH_PAGE = """<html><body>
<div id="content">
  <h1>Journal of Someone</h1>
  <div id="entry-wrapper-1234">
    <div id="entry-1234">
      <h3>Subject line</h3>
      <p>Entry text.</p>
    </div>
  </div>
</div>
</body></html>"""

NO_ARTICLE_PAGE = "<html><body><div><p>Nothing to see</p></div></body></html>"

CONFIG_YAML = f"""
blog_posts:
  - url: {POST_URL}
    category: Learning
  - url: https://other.example.org/posts/async
  - url: https://example.com/blog/draft
    publish: false

authors:
  - name: Jane Smith
    github: jsmith
    blog: https://example.com/blog/
  - name: No Blog
"""


@pytest.fixture
def article_page() -> str:
    return ARTICLE_PAGE


@pytest.fixture
def missing_h1_page() -> str:
    return MISSING_H1_PAGE


@pytest.fixture
def dreamwidth_page() -> str:
    return DREAMWIDTH_PAGE


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "blog-posts.yaml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def no_article_page() -> str:
    return NO_ARTICLE_PAGE
