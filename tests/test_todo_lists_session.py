"""ListSession の単体テスト"""

import threading

import pytest

from src.todo_lists import ListSession, NotFoundError, ValidationError
from src.todo_lists.views import is_list_complete


@pytest.fixture
def session():
    return ListSession("test-session-id")


class TestCreateList:
    def test_name_length_boundaries(self, session):
        assert session.create_list("a").name == "a"
        assert session.create_list("b" * 100).name == "b" * 100

        with pytest.raises(ValidationError):
            session.create_list("")
        with pytest.raises(ValidationError):
            session.create_list("c" * 101)

        assert len(session.lists) == 2

    def test_whitespace_only_name_is_rejected(self, session):
        with pytest.raises(ValidationError, match="between 1 and 100"):
            session.create_list("   ")

    def test_name_is_stripped(self, session):
        assert session.create_list("  Errands  ").name == "Errands"

    def test_duplicate_name_is_rejected(self, session):
        session.create_list("Groceries")
        with pytest.raises(ValidationError, match="unique"):
            session.create_list("Groceries")
        assert len(session.lists) == 1

    def test_uniqueness_is_case_sensitive(self, session):
        session.create_list("Groceries")
        session.create_list("groceries")
        assert [lst.name for lst in session.lists] == ["Groceries", "groceries"]

    def test_ids_are_never_reused(self, session):
        first = session.create_list("One")
        session.delete_list(0)
        second = session.create_list("Two")
        assert second.id > first.id


class TestRenameList:
    def test_rename_to_own_name_succeeds(self, session):
        session.create_list("Groceries")
        renamed = session.rename_list(0, "Groceries")
        assert renamed.name == "Groceries"

    def test_rename_to_other_lists_name_fails(self, session):
        session.create_list("Groceries")
        session.create_list("Chores")
        with pytest.raises(ValidationError, match="unique"):
            session.rename_list(1, "Groceries")
        assert session.lists[1].name == "Chores"

    def test_rename_stores_stripped_name(self, session):
        session.create_list("Groceries")
        session.rename_list(0, "  Shopping ")
        assert session.lists[0].name == "Shopping"

    def test_rename_invalid_length(self, session):
        session.create_list("Groceries")
        with pytest.raises(ValidationError):
            session.rename_list(0, "x" * 101)

    def test_rename_missing_list(self, session):
        with pytest.raises(NotFoundError):
            session.rename_list(0, "Anything")


class TestDeleteList:
    def test_delete_shifts_following_lists(self, session):
        for name in ("A", "B", "C"):
            session.create_list(name)
        removed = session.delete_list(0)
        assert removed.name == "A"
        assert [lst.name for lst in session.lists] == ["B", "C"]

    def test_delete_from_empty_session(self, session):
        with pytest.raises(NotFoundError):
            session.delete_list(0)

    @pytest.mark.parametrize("index", [1, -1])
    def test_out_of_range_index(self, session, index):
        session.create_list("Only")
        with pytest.raises(NotFoundError, match="list was not found"):
            session.delete_list(index)


class TestTodos:
    def test_add_todo(self, session):
        session.create_list("Groceries")
        todo = session.add_todo(0, " Milk ")
        assert todo.name == "Milk"
        assert todo.completed is False

    def test_add_todo_too_long_leaves_list_unchanged(self, session):
        session.create_list("Groceries")
        session.add_todo(0, "Milk")
        with pytest.raises(ValidationError, match="Todo name"):
            session.add_todo(0, "x" * 101)
        assert len(session.lists[0].todos) == 1

    def test_add_todo_to_missing_list(self, session):
        with pytest.raises(NotFoundError):
            session.add_todo(3, "Milk")

    def test_delete_first_of_three(self, session):
        session.create_list("Groceries")
        for name in ("Milk", "Eggs", "Bread"):
            session.add_todo(0, name)

        removed = session.delete_todo(0, 0)

        assert removed.name == "Milk"
        assert [todo.name for todo in session.lists[0].todos] == ["Eggs", "Bread"]

    def test_delete_missing_todo(self, session):
        session.create_list("Groceries")
        with pytest.raises(NotFoundError, match="todo was not found"):
            session.delete_todo(0, 0)

    def test_set_todo_status_both_ways(self, session):
        session.create_list("Groceries")
        session.add_todo(0, "Milk")

        assert session.set_todo_status(0, 0, True).completed is True
        assert session.set_todo_status(0, 0, False).completed is False

    def test_set_status_on_missing_todo(self, session):
        session.create_list("Groceries")
        with pytest.raises(NotFoundError):
            session.set_todo_status(0, 5, True)

    def test_complete_all(self, session):
        session.create_list("Groceries")
        for name in ("Milk", "Eggs"):
            session.add_todo(0, name)
        session.complete_all(0)
        assert all(todo.completed for todo in session.lists[0].todos)

    def test_complete_all_on_empty_list(self, session):
        session.create_list("Empty")
        session.complete_all(0)
        assert session.lists[0].todos == []
        assert is_list_complete(session.lists[0]) is False


def test_groceries_flow(session):
    session.create_list("Groceries")
    session.add_todo(0, "Milk")
    session.set_todo_status(0, 0, True)
    groceries = session.lists[0]
    assert is_list_complete(groceries) is True

    session.complete_all(0)

    assert len(groceries.todos) == 1
    assert all(todo.completed for todo in groceries.todos)


class TestFlash:
    def test_flash_is_consumed_once(self, session):
        session.flash("success", "Saved")
        assert session.pop_flash() == ("success", "Saved")
        assert session.pop_flash() is None

    def test_later_flash_replaces_earlier(self, session):
        session.flash("success", "Saved")
        session.flash("error", "Oops")
        assert session.pop_flash() == ("error", "Oops")

    def test_unknown_kind(self, session):
        with pytest.raises(ValueError):
            session.flash("info", "Hello")


def test_concurrent_adds_are_serialized(session):
    session.create_list("Busy")

    def worker(offset):
        for n in range(50):
            session.add_todo(0, f"todo-{offset}-{n}")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    todos = session.lists[0].todos
    assert len(todos) == 400
    assert len({todo.id for todo in todos}) == 400
