"""AttachmentManager tests: batch cap, per-file checks, partial failure, ordering."""

import pytest

from helpers.fakes import FakeObjectStore, make_file
from rental_questionnaire.attachments import AttachmentManager, public_path
from rental_questionnaire.errors import (
    AttachmentLimitExceeded,
    AuthorizationError,
)


def files(n, prefix="plik"):
    return [make_file(f"{prefix}{i}.pdf") for i in range(n)]


@pytest.fixture
def manager(object_store):
    return AttachmentManager(object_store, max_files=10, max_file_bytes=100)


class TestBatchCap:
    @pytest.mark.asyncio
    async def test_oversized_batch_rejected_whole(self, manager, object_store):
        with pytest.raises(AttachmentLimitExceeded) as info:
            await manager.upload(files(11))
        assert info.value.max_files == 10
        assert len(manager) == 0
        assert object_store.calls == []

    @pytest.mark.asyncio
    async def test_batch_counts_existing_attachments(self, manager):
        await manager.upload(files(8, "a"))
        with pytest.raises(AttachmentLimitExceeded):
            await manager.upload(files(3, "b"))
        assert len(manager) == 8

        report = await manager.upload(files(2, "c"))
        assert len(report.added) == 2
        assert len(manager) == 10
        assert manager.remaining == 0

    @pytest.mark.asyncio
    async def test_empty_batch_is_noop(self, manager, object_store):
        report = await manager.upload([])
        assert report.added == [] and report.failures == []
        assert object_store.calls == []


class TestPerFile:
    @pytest.mark.asyncio
    async def test_too_large_file_skipped(self, manager, object_store):
        report = await manager.upload([make_file("duzy.pdf", size=101), make_file("ok.pdf")])
        assert [a.name for a in report.added] == ["ok.pdf"]
        assert [(f.name, f.reason) for f in report.failures] == [("duzy.pdf", "too_large")]
        # The skipped file never reached storage
        assert object_store.calls == ["issue", "put:ok.pdf"]

    @pytest.mark.asyncio
    async def test_type_allow_list(self, object_store):
        manager = AttachmentManager(object_store, allowed_types=["image/*", "application/pdf"])
        report = await manager.upload([
            make_file("a.png", content_type="image/png"),
            make_file("b.exe", content_type="application/x-msdownload"),
            make_file("c.pdf"),
        ])
        assert [a.name for a in report.added] == ["a.png", "c.pdf"]
        assert report.failures[0].reason == "type_rejected"

    @pytest.mark.asyncio
    async def test_transport_failure_keeps_earlier_and_later_files(self):
        store = FakeObjectStore(fail_names={"b.pdf"})
        manager = AttachmentManager(store)
        report = await manager.upload([make_file("a.pdf"), make_file("b.pdf"), make_file("c.pdf")])
        assert [a.name for a in manager.attachments] == ["a.pdf", "c.pdf"]
        assert [(f.name, f.reason) for f in report.failures] == [("b.pdf", "transport")]

    @pytest.mark.asyncio
    async def test_authorization_failure_aborts_batch(self):
        store = FakeObjectStore(error=AuthorizationError("expired", status_code=401))
        manager = AttachmentManager(store)
        with pytest.raises(AuthorizationError):
            await manager.upload([make_file("a.pdf"), make_file("b.pdf")])
        assert len(manager) == 0
        assert store.calls == ["issue", "put:a.pdf"]


class TestOrdering:
    @pytest.mark.asyncio
    async def test_files_uploaded_sequentially_in_input_order(self, manager, object_store):
        await manager.upload([make_file("1.pdf"), make_file("2.pdf"), make_file("3.pdf")])
        assert object_store.calls == [
            "issue", "put:1.pdf", "issue", "put:2.pdf", "issue", "put:3.pdf",
        ]

    @pytest.mark.asyncio
    async def test_metadata_uses_public_path(self, manager):
        report = await manager.upload([make_file("oferta.pdf", size=42)])
        (att,) = report.added
        assert att.url == "/objects/uploads/obj-1"
        assert att.size == 42
        assert att.type == "application/pdf"


class TestRemove:
    @pytest.mark.asyncio
    async def test_remove_by_index(self, manager):
        await manager.upload(files(3))
        removed = manager.remove(1)
        assert removed.name == "plik1.pdf"
        assert [a.name for a in manager.attachments] == ["plik0.pdf", "plik2.pdf"]

    def test_remove_out_of_range(self, manager):
        with pytest.raises(IndexError):
            manager.remove(0)

    @pytest.mark.asyncio
    async def test_attachments_property_is_a_copy(self, manager):
        await manager.upload(files(1))
        manager.attachments.clear()
        assert len(manager) == 1


class TestPublicPath:
    def test_strips_host_and_query(self):
        assert public_path("https://s.test/bucket/uploads/abc123?sig=1&exp=2") == "/objects/uploads/abc123"

    def test_custom_mount(self):
        assert public_path("https://s.test/x/y", "/files") == "/files/y"

    def test_target_without_path_rejected(self):
        with pytest.raises(ValueError):
            public_path("https://s.test/")

    @pytest.mark.asyncio
    async def test_bad_target_recorded_as_transport_failure(self):
        class RootStore(FakeObjectStore):
            async def issue_upload_target(self):
                return "https://s.test/"

        manager = AttachmentManager(RootStore())
        report = await manager.upload([make_file("a.pdf")])
        assert report.failures[0].reason == "transport"
