import logging
from typing import Annotated

import pytest

from pymeerkat import Document
from pymeerkat.fields.markers import UniqueIndex
from pymeerkat.lifecycle.observability import (
    get_slow_query_threshold,
    set_slow_query_threshold,
    track_query,
)


class TracedDoc(Document):
    name: str

    class Settings:
        collection = "traced_docs"


class IndexedTracedDoc(Document):
    code: Annotated[str, UniqueIndex()] = ""


def messages(caplog, level):
    return [r.getMessage() for r in caplog.records if r.name == "pymeerkat" and r.levelno == level]


class TestQueryLogging:
    async def test_calls_are_logged_at_debug(self, database, caplog):
        with caplog.at_level(logging.DEBUG, logger="pymeerkat"):
            await TracedDoc.find(name="Frank")

        (message,) = messages(caplog, logging.DEBUG)
        assert message.startswith("find on traced_docs took")
        assert "{'name': 'Frank'}" in message

    async def test_save_logs_the_id(self, database, caplog):
        doc = TracedDoc(name="Alice")
        with caplog.at_level(logging.DEBUG, logger="pymeerkat"):
            await doc.save()
        assert any(str(doc.id) in m for m in messages(caplog, logging.DEBUG))

    async def test_slow_query_logs_warning(self, database, caplog):
        set_slow_query_threshold(0.0)
        with caplog.at_level(logging.WARNING, logger="pymeerkat"):
            await TracedDoc(name="Diana").save()
        (message,) = messages(caplog, logging.WARNING)
        assert message.startswith("Slow query: save on traced_docs")

    async def test_threshold_none_disables_warnings(self, database, caplog):
        set_slow_query_threshold(None)
        assert get_slow_query_threshold() is None
        with caplog.at_level(logging.DEBUG, logger="pymeerkat"):
            await TracedDoc.count()
        assert messages(caplog, logging.WARNING) == []
        assert len(messages(caplog, logging.DEBUG)) == 1

    async def test_failed_call_is_still_logged(self, database, caplog):
        database["traced_docs"].count_documents.side_effect = RuntimeError("boom")
        with caplog.at_level(logging.DEBUG, logger="pymeerkat"):
            with pytest.raises(RuntimeError):
                await TracedDoc.count()
        assert messages(caplog, logging.DEBUG)[0].startswith("count on traced_docs")

    async def test_track_query_reraises(self, caplog):
        with pytest.raises(KeyError):
            async with track_query("find", "things"):
                raise KeyError("missing")

    async def test_index_creation_is_logged(self, database, caplog):
        with caplog.at_level(logging.INFO, logger="pymeerkat"):
            await IndexedTracedDoc.count()
        assert any("code_1" in record.getMessage() for record in caplog.records)
