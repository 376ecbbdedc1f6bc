from __future__ import annotations

import pytest

from tests.support.documents import make_document, text_extractor
from ventureai.documents.budget import (
    TRUNCATION_MARKER,
    ContentBudgetAllocator,
    render_document_context,
    truncate_text,
)

pytestmark = [pytest.mark.unit]


def _allocator(texts: dict[str, str], *, per_doc_cap: int = 5000, aggregate_cap: int = 20000):
    return ContentBudgetAllocator(
        text_extractor(texts),
        per_doc_cap=per_doc_cap,
        aggregate_cap=aggregate_cap,
    )


def test_truncate_text_is_strict_at_the_cap() -> None:
    assert truncate_text("a" * 5000, 5000) == ("a" * 5000, False)
    assert truncate_text("a" * 5001, 5000) == ("a" * 5000, True)


def test_three_documents_are_capped_individually() -> None:
    docs = [make_document("d1"), make_document("d2"), make_document("d3")]
    allocator = _allocator({"d1": "a" * 3000, "d2": "b" * 6000, "d3": "c" * 15000})

    context = allocator.allocate(docs)

    assert [doc.source_document_id for doc in context.included] == ["d1", "d2", "d3"]
    assert [len(doc.text) for doc in context.included] == [3000, 5000, 5000]
    assert context.truncation_flags == {"d1": False, "d2": True, "d3": True}
    assert context.included_chars == 13000
    assert context.text.count(TRUNCATION_MARKER) == 2


def test_empty_document_list_yields_empty_context() -> None:
    context = _allocator({}).allocate([])

    assert context.text == ""
    assert context.included == ()
    assert TRUNCATION_MARKER not in context.text


def test_context_header_and_ordinals() -> None:
    docs = [
        make_document("d1", name="Pitch.txt"),
        make_document("d2", name="Empty.txt"),
        make_document("d3", name="Plan.txt"),
    ]
    context = _allocator({"d1": "pitch", "d3": "plan"}).allocate(docs)

    assert context.text == (
        "\n\nVenture documents (2 of 3):\n\n"
        '--- Document 1: "Pitch.txt" ---\npitch\n\n'
        '--- Document 2: "Plan.txt" ---\nplan'
    )


def test_empty_extraction_consumes_no_budget() -> None:
    docs = [make_document("empty"), make_document("full")]
    context = _allocator({"full": "x" * 100}, per_doc_cap=100, aggregate_cap=100).allocate(docs)

    assert [doc.source_document_id for doc in context.included] == ["full"]
    assert context.included_chars == 100


def test_document_that_only_fits_partially_stops_inclusion() -> None:
    docs = [make_document("d1"), make_document("d2"), make_document("d3")]
    allocator = _allocator(
        {"d1": "a" * 4000, "d2": "b" * 4000, "d3": "c" * 10},
        per_doc_cap=5000,
        aggregate_cap=6000,
    )

    context = allocator.allocate(docs)

    # d2 would overflow, and nothing after it is considered.
    assert [doc.source_document_id for doc in context.included] == ["d1"]
    assert context.included_chars == 4000


def test_exhausted_budget_stops_before_extracting() -> None:
    extracted: list[str] = []

    def extract(document):
        extracted.append(document.id)
        return "x" * 50

    allocator = ContentBudgetAllocator(extract, per_doc_cap=50, aggregate_cap=100)
    docs = [make_document(f"d{i}") for i in range(5)]

    context = allocator.allocate(docs)

    assert context.included_chars == 100
    assert extracted == ["d0", "d1"]


@pytest.mark.parametrize(
    ("lengths", "per_doc_cap", "aggregate_cap"),
    [
        ([3000, 6000, 15000], 5000, 20000),
        ([5000, 5000, 5000, 5000, 5000], 5000, 20000),
        ([1, 9999, 4, 7000, 0, 2500], 5000, 12000),
        ([20000, 20000], 15000, 20000),
        ([7, 7, 7], 10, 15),
    ],
)
def test_included_text_never_exceeds_caps(lengths, per_doc_cap, aggregate_cap) -> None:
    texts = {f"d{i}": "z" * n for i, n in enumerate(lengths)}
    docs = [make_document(doc_id) for doc_id in texts]

    context = _allocator(texts, per_doc_cap=per_doc_cap, aggregate_cap=aggregate_cap).allocate(docs)

    assert context.included_chars <= aggregate_cap
    for doc in context.included:
        original = len(texts[doc.source_document_id])
        assert len(doc.text) <= per_doc_cap
        assert doc.truncated == (original > per_doc_cap)



def _raising_extractor(texts: dict[str, str], *, broken: str):
    def extract(document):
        if document.id == broken:
            raise ValueError("embedded null byte")
        return texts.get(document.id, "")

    return extract


def test_raising_extractor_skips_only_that_document() -> None:
    allocator = ContentBudgetAllocator(
        _raising_extractor({"d1": "first", "d3": "third"}, broken="d2"),
        per_doc_cap=5000,
        aggregate_cap=20000,
    )

    context = allocator.allocate([make_document(doc_id) for doc_id in ("d1", "d2", "d3")])

    assert [doc.source_document_id for doc in context.included] == ["d1", "d3"]
    assert context.total_documents == 3


@pytest.mark.asyncio
async def test_raising_extractor_in_worker_thread_is_contained() -> None:
    allocator = ContentBudgetAllocator(
        _raising_extractor({"d2": "second"}, broken="d1"),
        per_doc_cap=5000,
        aggregate_cap=20000,
    )

    context = await allocator.allocate_async([make_document("d1"), make_document("d2")])

    assert [doc.source_document_id for doc in context.included] == ["d2"]


@pytest.mark.asyncio
async def test_parallel_allocation_matches_sequential() -> None:
    texts = {"d1": "a" * 3000, "d2": "", "d3": "b" * 9000, "d4": "c" * 4000, "d5": "d" * 5000}
    docs = [make_document(doc_id) for doc_id in texts]
    allocator = _allocator(texts, per_doc_cap=5000, aggregate_cap=12000)

    sequential = allocator.allocate(docs)
    parallel = await allocator.allocate_async(docs)

    assert parallel == sequential


@pytest.mark.asyncio
async def test_parallel_allocation_of_nothing() -> None:
    context = await _allocator({}).allocate_async([])

    assert context.text == ""


def test_caps_must_be_positive() -> None:
    with pytest.raises(ValueError):
        ContentBudgetAllocator(lambda _doc: "", per_doc_cap=0, aggregate_cap=10)


def test_render_marks_truncated_documents_only() -> None:
    from ventureai.documents import ExtractedDocument

    text = render_document_context(
        [
            ExtractedDocument("d1", "a.txt", "short", truncated=False),
            ExtractedDocument("d2", "b.txt", "cut", truncated=True),
        ],
        total_documents=4,
    )

    assert text.startswith("\n\nVenture documents (2 of 4):")
    assert text.endswith("cut" + TRUNCATION_MARKER)
    assert text.count(TRUNCATION_MARKER) == 1
