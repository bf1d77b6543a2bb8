from pathlib import Path
from typing import Dict, List

import pytest
from whoosh import index as whoosh_index

from docsearch.index.base_index import BaseIndex, RawMatch
from docsearch.index.schema import make_schema
from docsearch.search.documents import Document, DocumentType
from docsearch.search.query import StructuredQuery

RED_PEPPER_CONTENT = "This dish uses a red pepper. It is spicy and sweet."


def make_corpus() -> Dict[str, Document]:
    return {
        "0": Document(
            title="Red Pepper Guide",
            content=RED_PEPPER_CONTENT,
            keywords="spice,vegetable",
            url="/guide",
        ),
        "1": Document(
            title="Roasting",
            page_title="Cooking Basics",
            content="Roast the green pepper until the skin blisters. Peel it while warm.",
            url="/basics#roasting",
            version="2.0",
            type=DocumentType.SECTION,
        ),
        "2": Document(
            title="Installation",
            content="Install the package with pip. Configure the index path before the first run.",
            keywords="setup,install",
            url="/install",
        ),
    }


def build_index(path: Path, corpus: Dict[str, Document]) -> None:
    # Stands in for the documentation build that ships the index
    ix = whoosh_index.create_in(str(path), make_schema())
    writer = ix.writer()
    for ref, doc in corpus.items():
        writer.add_document(
            ref=ref,
            title=doc.title,
            content=doc.content,
            keywords=doc.keywords or "",
        )
    writer.commit()


class FakeIndex(BaseIndex):
    """Returns canned matches and records the queries it was given."""

    def __init__(self, matches: List[RawMatch], error: Exception | None = None) -> None:
        self.matches = matches
        self.error = error
        self.queries: List[StructuredQuery] = []

    def execute(self, query: StructuredQuery) -> List[RawMatch]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return list(self.matches)


@pytest.fixture
def corpus() -> Dict[str, Document]:
    return make_corpus()


@pytest.fixture
def index_dir(tmp_path: Path, corpus: Dict[str, Document]) -> Path:
    target = tmp_path / "index"
    target.mkdir()
    build_index(target, corpus)
    return target
