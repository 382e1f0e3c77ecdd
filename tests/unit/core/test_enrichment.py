"""Tests for concurrent chunk enrichment."""

from dataclasses import replace

from chunklab.core.base import Chunk, ChunkEnrichment, ChunkKind
from chunklab.core.config import EnrichmentOptions
from chunklab.core.enrichment import EnrichmentRunner, enrich_chunks


def make_chunks(count, prefix="chunk"):
    return [Chunk(id=f"{prefix}-{i}", content=f"Content number {i} of the document.") for i in range(count)]


class TestEnrichmentRunner:
    """Test bounded fan-out of enrichment calls."""

    def setup_method(self):
        self.options = EnrichmentOptions(summarize=True, label=True)

    def test_limit_bounds_calls(self, fake_enricher):
        """Only the first ``limit`` chunks are sent to the enricher."""
        chunks = make_chunks(15)
        enriched, warnings = EnrichmentRunner(fake_enricher, self.options, limit=10).run(chunks)

        assert warnings == []
        assert len(fake_enricher.calls) == 10
        assert all(chunk.enrichment is not None for chunk in enriched[:10])
        assert all(chunk.enrichment is None for chunk in enriched[10:])

    def test_order_preserved(self, fake_enricher):
        chunks = make_chunks(8)
        enriched, _ = EnrichmentRunner(fake_enricher, self.options, max_workers=4).run(chunks)
        assert [chunk.id for chunk in enriched] == [chunk.id for chunk in chunks]
        assert enriched[3].enrichment.summary == chunks[3].content[:20]
        assert enriched[3].enrichment.labels == ("test",)

    def test_parents_skipped(self, fake_enricher):
        parent = Chunk(id="p0", content="Parent content.", kind=ChunkKind.PARENT)
        child = Chunk(id="c0", content="Parent", kind=ChunkKind.CHILD, parent_id="p0")
        enriched, _ = EnrichmentRunner(fake_enricher, self.options).run([parent, child])
        assert fake_enricher.calls == ["c0"]
        assert enriched[0].enrichment is None
        assert enriched[1].enrichment is not None

    def test_failure_isolated(self, enricher_factory):
        """A failing call leaves its chunk unannotated and becomes a warning."""
        enricher = enricher_factory(fail_on="number 2 ")
        chunks = make_chunks(5)
        enriched, warnings = EnrichmentRunner(enricher, self.options).run(chunks)

        assert len(warnings) == 1
        assert "chunk-2" in warnings[0]
        assert enriched[2].enrichment is None
        assert all(enriched[i].enrichment is not None for i in (0, 1, 3, 4))

    def test_unexpected_exception_wrapped(self):
        def broken(chunk, model_id, options):
            raise RuntimeError("boom")

        enriched, warnings = EnrichmentRunner(broken, self.options).run(make_chunks(2))
        assert len(warnings) == 2
        assert all(chunk.enrichment is None for chunk in enriched)

    def test_wrong_return_type(self):
        enriched, warnings = EnrichmentRunner(lambda chunk, model_id, options: "summary", self.options).run(make_chunks(1))
        assert len(warnings) == 1
        assert enriched[0].enrichment is None

    def test_disabled_options_make_no_calls(self, fake_enricher):
        chunks = make_chunks(3)
        enriched, warnings = EnrichmentRunner(fake_enricher, EnrichmentOptions()).run(chunks)
        assert fake_enricher.calls == []
        assert enriched == chunks
        assert warnings == []

    def test_zero_limit(self, fake_enricher):
        EnrichmentRunner(fake_enricher, self.options, limit=0).run(make_chunks(3))
        assert fake_enricher.calls == []

    def test_model_and_options_forwarded(self):
        """The enricher is called as (chunk, model, options)."""
        seen = []

        def enricher(chunk, model_id, options):
            seen.append((chunk.id, model_id, options))
            raise ValueError("stop")

        enrich_chunks(make_chunks(1), enricher, self.options, model="small-model")
        assert seen == [("chunk-0", "small-model", self.options)]

    def test_returned_chunk_annotations_applied(self):
        """An enricher returning the annotated chunk has its annotations kept."""
        def enricher(chunk, model_id, options):
            return replace(chunk, enrichment=ChunkEnrichment(summary=f"{model_id}: {chunk.id}"))

        chunks = make_chunks(3)
        enriched, warnings = EnrichmentRunner(enricher, self.options, model="m1").run(chunks)

        assert warnings == []
        assert [chunk.enrichment.summary for chunk in enriched] == ["m1: chunk-0", "m1: chunk-1", "m1: chunk-2"]
        assert [chunk.content for chunk in enriched] == [chunk.content for chunk in chunks]

    def test_bare_annotations_accepted(self):
        enriched, warnings = EnrichmentRunner(
            lambda chunk, model_id, options: ChunkEnrichment(summary="short"), self.options
        ).run(make_chunks(2))
        assert warnings == []
        assert all(chunk.enrichment.summary == "short" for chunk in enriched)

    def test_returned_chunk_without_annotations(self):
        enriched, warnings = EnrichmentRunner(
            lambda chunk, model_id, options: chunk, self.options
        ).run(make_chunks(1))
        assert len(warnings) == 1
        assert enriched[0].enrichment is None
