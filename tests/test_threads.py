"""Unit tests for the thread store."""

from translator.core.models import Message, PLACEHOLDER_TITLE
from translator.core.storage import ThreadPersistence
from translator.core.threads import ThreadStore


def _msg(store, text="Hello", role="user"):
    return Message(id=store.new_id(), role=role, text=text, lang_label="English", lang_code="en-US")


class TestCreateThread:
    def test_create_sets_active_and_placeholder_title(self, store):
        thread_id = store.create_thread()

        assert store.active_thread_id == thread_id
        assert store.get_thread(thread_id).title == PLACEHOLDER_TITLE
        assert store.get_thread(thread_id).messages == ()

    def test_reuses_newest_empty_thread(self, store):
        first = store.create_thread()
        for _ in range(5):
            assert store.create_thread() == first

        assert len(store.list_threads()) == 1

    def test_creates_new_thread_once_newest_has_messages(self, store):
        first = store.create_thread()
        store.append_message(first, _msg(store))

        second = store.create_thread()

        assert second != first
        assert [t.id for t in store.list_threads()] == [second, first]
        assert store.active_thread_id == second

    def test_reuse_reselects_empty_thread(self, store):
        busy = store.create_thread()
        store.append_message(busy, _msg(store))
        empty = store.create_thread()
        store.select_thread(busy)

        assert store.create_thread() == empty
        assert store.active_thread_id == empty

    def test_ids_are_unique_and_increasing(self, store):
        ids = [store.new_id() for _ in range(50)]
        assert len(set(ids)) == 50
        assert [int(i) for i in ids] == sorted(int(i) for i in ids)


class TestAppendMessage:
    def test_first_message_sets_truncated_title(self, store):
        thread_id = store.create_thread()
        store.append_message(thread_id, _msg(store, "Hello"))

        assert store.get_thread(thread_id).title == "Hello..."

    def test_long_first_message_is_cut_at_thirty_chars(self, store):
        thread_id = store.create_thread()
        text = "abcdefghijklmnopqrstuvwxyz0123456789"
        store.append_message(thread_id, _msg(store, text))

        assert store.get_thread(thread_id).title == text[:30] + "..."

    def test_later_messages_keep_title(self, store):
        thread_id = store.create_thread()
        store.append_message(thread_id, _msg(store, "Hello"))
        store.append_message(thread_id, _msg(store, "Bonjour", role="assistant"))

        thread = store.get_thread(thread_id)
        assert thread.title == "Hello..."
        assert [m.text for m in thread.messages] == ["Hello", "Bonjour"]

    def test_unknown_thread_is_noop(self, store, kv):
        thread_id = store.create_thread()
        before = store.list_threads()
        saved = kv.get("translation-chats")

        store.append_message("missing", _msg(store))

        assert store.list_threads() == before
        assert store.get_thread(thread_id).messages == ()
        assert kv.get("translation-chats") == saved

    def test_appending_does_not_mutate_previous_snapshot(self, store):
        thread_id = store.create_thread()
        store.append_message(thread_id, _msg(store, "one"))
        snapshot = store.get_thread(thread_id)

        store.append_message(thread_id, _msg(store, "two"))

        assert [m.text for m in snapshot.messages] == ["one"]
        assert [m.text for m in store.get_thread(thread_id).messages] == ["one", "two"]


class TestDeleteAndSelect:
    def _three_threads(self, store):
        ids = []
        for text in ("a", "b", "c"):
            thread_id = store.create_thread()
            store.append_message(thread_id, _msg(store, text))
            ids.append(thread_id)
        return ids  # oldest first

    def test_delete_active_selects_newest_remaining(self, store):
        a, b, c = self._three_threads(store)
        store.select_thread(b)

        store.delete_thread(b)

        assert store.active_thread_id == c
        assert [t.id for t in store.list_threads()] == [c, a]

    def test_delete_newest_active_falls_back_to_next(self, store):
        a, b, c = self._three_threads(store)

        store.delete_thread(c)

        assert store.active_thread_id == b

    def test_delete_inactive_keeps_selection(self, store):
        a, b, c = self._three_threads(store)
        store.select_thread(a)

        store.delete_thread(c)

        assert store.active_thread_id == a

    def test_delete_last_clears_selection(self, store):
        thread_id = store.create_thread()
        store.delete_thread(thread_id)

        assert store.active_thread_id is None
        assert store.list_threads() == ()

    def test_select_unknown_keeps_selection(self, store):
        a, b, c = self._three_threads(store)
        store.select_thread(a)
        store.select_thread("nope")

        assert store.active_thread_id == a


class TestPersistenceWiring:
    def test_mutations_write_through(self, store, persistence):
        thread_id = store.create_thread()
        store.append_message(thread_id, _msg(store, "Hello"))

        assert persistence.load() == list(store.list_threads())

    def test_empty_list_is_persisted_after_delete(self, store, persistence):
        thread_id = store.create_thread()
        store.delete_thread(thread_id)

        assert persistence.exists()
        assert persistence.load() == []

    def test_load_selects_newest(self, kv):
        first = ThreadStore.load(ThreadPersistence(kv))
        old = first.create_thread()
        first.append_message(old, _msg(first, "old"))
        new = first.create_thread()

        reloaded = ThreadStore.load(ThreadPersistence(kv))

        assert reloaded.active_thread_id == new
        assert int(reloaded.new_id()) > int(new)

    def test_rename_ignores_blank_titles(self, store):
        thread_id = store.create_thread()
        store.rename_thread(thread_id, "   ")
        assert store.get_thread(thread_id).title == PLACEHOLDER_TITLE

        store.rename_thread(thread_id, " Trip to Lyon ")
        assert store.get_thread(thread_id).title == "Trip to Lyon"
