from __future__ import annotations

import re
import unicodedata
from typing import List, Sequence

import requests
from bs4 import BeautifulSoup
from langchain_core.documents import Document
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from common.config import LoaderConfig
from common.errors import InputShapeMismatchError
from common.logger import get_logger

log = get_logger(__name__)


def _clean_text(s: str) -> str:
    s = unicodedata.normalize("NFKC", s).replace("\u00a0", " ")
    s = re.sub(r"[ \t]+", " ", s)
    s = re.sub(r"\s*\n\s*", "\n", s)
    return s.strip()


def _fetch(url: str, cfg: LoaderConfig) -> requests.Response:
    """Download URL, retrying up to cfg.max_attempts times (1 = no retry)."""
    for attempt in Retrying(
        retry=retry_if_exception_type(requests.RequestException),
        stop=stop_after_attempt(cfg.max_attempts),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    ):
        with attempt:
            resp = requests.get(
                url,
                timeout=cfg.timeout,
                headers={"User-Agent": cfg.user_agent},
            )
            resp.raise_for_status()
    return resp


def parse_html(
    html: str, selector: str, source: str, per_element: bool = False
) -> List[Document]:
    """
    Extract the text of every top-level element matching a CSS selector.

    By default all matches are joined into a single Document for the page;
    a page with no (non-empty) match yields no Document at all. With
    per_element=True each match becomes its own Document.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style", "noscript"]):
        tag.extract()

    matches = soup.select(selector)
    # nested matches belong to the outermost matched element
    match_ids = {id(el) for el in matches}
    top_level = [
        el for el in matches if not any(id(p) in match_ids for p in el.parents)
    ]
    texts = [_clean_text(el.get_text()) for el in top_level]
    texts = [t for t in texts if t]
    metadata = {"source": source, "selector": selector, "type": "web"}

    if per_element:
        return [
            Document(page_content=t, metadata={**metadata, "element_index": i})
            for i, t in enumerate(texts)
        ]
    if not texts:
        return []
    return [Document(page_content="\n\n".join(texts), metadata=metadata)]


def load_from_url(
    url: str, selector: str = "p", cfg: LoaderConfig | None = None
) -> List[Document]:
    """Fetch a web page and return the Documents extracted with the selector."""
    cfg = cfg or LoaderConfig()
    resp = _fetch(url, cfg)
    docs = parse_html(resp.text, selector, source=url, per_element=cfg.per_element)
    log.info("Loaded %d document(s) from %s (selector=%r)", len(docs), url, selector)
    return docs


def ensure_single_document(docs: Sequence[Document]) -> Document:
    if len(docs) != 1:
        source = docs[0].metadata.get("source") if docs else None
        raise InputShapeMismatchError(expected=1, actual=len(docs), source=source)
    return docs[0]
