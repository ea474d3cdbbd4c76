"""Tests for the todolist CLI."""

import json

import pytest
from click.testing import CliRunner

from todolist.adapters.memory_kv import MemoryKeyValueStore
from todolist.adapters.storage import KeyValueTaskStore
from todolist.cli import main, run_shell_command
from todolist.config import Config
from todolist.controller import TodoController


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    monkeypatch.setattr("todolist.cli.load_config", lambda: Config())


@pytest.fixture
def storage(tmp_path):
    return str(tmp_path / "storage.json")


@pytest.fixture
def run(storage):
    runner = CliRunner()

    def invoke(*args, input=None):
        return runner.invoke(main, ["--storage", storage, *args], input=input)

    return invoke


def stored_tasks(storage):
    with open(storage) as f:
        return json.loads(json.load(f)["tasks"])


class TestOneShotCommands:
    def test_add(self, run, storage):
        result = run("add", "Buy", "milk")
        assert result.exit_code == 0
        assert result.output.strip() == "Task added"
        assert stored_tasks(storage) == [{"text": "Buy milk", "completed": False, "deadline": ""}]

    def test_add_with_deadline(self, run, storage):
        run("add", "Pay rent", "--deadline", "2024-02-01T09:00")
        assert stored_tasks(storage)[0]["deadline"] == "2024-02-01T09:00"

    def test_add_blank(self, run):
        result = run("add", "  ")
        assert result.exit_code == 0
        assert "Nothing to add" in result.output

    def test_list(self, run):
        run("add", "Buy milk")
        run("add", "Call mom")
        run("toggle", "2")
        result = run("list")
        assert result.exit_code == 0
        assert "1. [ ] Buy milk" in result.output
        assert "2. [x] Call mom" in result.output
        assert "Completed tasks: 1/2" in result.output

    def test_list_filter_keeps_positions(self, run):
        run("add", "Buy milk")
        run("add", "Call mom")
        run("toggle", "2")
        result = run("list", "--filter", "completed")
        assert "2. [x] Call mom" in result.output
        assert "Buy milk" not in result.output
        assert "Completed tasks: 1/2" in result.output

    def test_list_json_sorted(self, run):
        for text in ["banana", "Apple", "cherry"]:
            run("add", text)
        result = run("list", "--sort", "alphabetical", "--json")
        rows = json.loads(result.output)
        assert [r["text"] for r in rows] == ["Apple", "banana", "cherry"]
        assert [r["position"] for r in rows] == [2, 1, 3]
        assert rows[0]["urgency"] == "normal"

    def test_list_rejects_unknown_filter(self, run):
        result = run("list", "--filter", "someday")
        assert result.exit_code != 0

    def test_list_empty(self, run):
        result = run("list")
        assert "No tasks." in result.output
        assert "Completed tasks: 0/0" in result.output

    def test_edit(self, run, storage):
        run("add", "Buy milk", "--deadline", "2024-02-01T09:00")
        result = run("edit", "1", "Buy", "oat", "milk")
        assert result.output.strip() == "Task edited"
        assert stored_tasks(storage) == [
            {"text": "Buy oat milk", "completed": False, "deadline": "2024-02-01T09:00"}
        ]

    def test_edit_missing_task(self, run):
        result = run("edit", "3", "anything")
        assert result.exit_code == 1
        assert "Error: No task at position 3" in result.output

    def test_toggle(self, run):
        run("add", "Buy milk")
        assert run("toggle", "1").output.strip() == "Buy milk: done"
        assert run("toggle", "1").output.strip() == "Buy milk: not done"

    def test_delete(self, run, storage):
        run("add", "Buy milk")
        result = run("delete", "1")
        assert result.output.strip() == "Task deleted"
        assert stored_tasks(storage) == []

    def test_rm_alias(self, run, storage):
        run("add", "Buy milk")
        run("rm", "1")
        assert stored_tasks(storage) == []

    def test_delete_missing_task(self, run):
        result = run("delete", "1")
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_stats_json(self, run):
        run("add", "A")
        run("add", "B")
        run("toggle", "1")
        result = run("stats", "--json")
        assert json.loads(result.output) == {"completed": 1, "total": 2}


class TestShell:
    def test_session(self, run, storage):
        result = run(
            "shell",
            input="text Buy milk\ndeadline 2024-02-01T09:00\nsubmit\nedit 1\ntext Buy bread\nsubmit\nquit\n",
        )
        assert result.exit_code == 0
        assert "[Add Task]" in result.output
        assert "[Edit Task]" in result.output
        assert "Task edited" in result.output
        assert stored_tasks(storage) == [
            {"text": "Buy bread", "completed": False, "deadline": "2024-02-01T09:00"}
        ]

    def test_exits_on_eof(self, run):
        result = run("shell", input="add Buy milk\n")
        assert result.exit_code == 0
        assert "Completed tasks: 0/1" in result.output


class TestRunShellCommand:
    @pytest.fixture
    def controller(self):
        return TodoController(KeyValueTaskStore(MemoryKeyValueStore()))

    def test_quit(self, controller):
        assert run_shell_command(controller, "quit") is False

    def test_add_and_toggle(self, controller):
        assert run_shell_command(controller, "add Buy milk") is True
        run_shell_command(controller, "toggle 1")
        assert controller.tasks[0].completed is True

    def test_bad_number_reports_error(self, controller, capsys):
        assert run_shell_command(controller, "toggle one") is True
        assert "expected a task number" in capsys.readouterr().err

    def test_out_of_range_reports_error(self, controller, capsys):
        assert run_shell_command(controller, "delete 4") is True
        assert "Error: No task at position 4" in capsys.readouterr().err

    def test_zero_is_rejected(self, controller, capsys):
        controller.add("A")
        run_shell_command(controller, "delete 0")
        assert "start at 1" in capsys.readouterr().err
        assert len(controller.tasks) == 1

    def test_filter_and_sort(self, controller):
        run_shell_command(controller, "filter notCompleted")
        run_shell_command(controller, "sort alphabetical")
        assert controller.state.task_filter.value == "notCompleted"
        assert controller.state.task_sort.value == "alphabetical"

    def test_unknown_sort_reports_error(self, controller, capsys):
        run_shell_command(controller, "sort randomly")
        assert "Error:" in capsys.readouterr().err

    def test_cancel(self, controller):
        controller.add("A")
        run_shell_command(controller, "edit 1")
        run_shell_command(controller, "cancel")
        assert controller.primary_action_label == "Add Task"

    def test_add_while_editing_keeps_form(self, controller):
        controller.add("A")
        run_shell_command(controller, "edit 1")
        run_shell_command(controller, "text A2")
        run_shell_command(controller, "add B")
        assert controller.primary_action_label == "Edit Task"
        assert controller.state.session.text == "A2"
        run_shell_command(controller, "submit")
        assert [t.text for t in controller.tasks] == ["A2", "B"]

    def test_unknown_command(self, controller, capsys):
        run_shell_command(controller, "frobnicate")
        assert "Unknown command" in capsys.readouterr().out
