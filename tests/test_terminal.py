import pytest
from typer.testing import CliRunner

from hourline.repository.configuration import ConfigurationRepository
from hourline.terminal import configuration, hours, sprint
from hourline.terminal.app import app

runner = CliRunner()

DATASET = """
entries:
  - {id: e1, date: "2024-06-03", hours: 2, user_id: u1, task_id: t1}
  - {id: e2, date: "2024-06-03", hours: 3, user_id: u2, task_id: t1}
  - {id: e3, date: "2024-06-10", hours: 1, user_id: u1, task_id: t2}
  - {id: e4, date: "2024-06-10", hours: 8, user_id: u1, is_planning_hours: true}
periods:
  - id: s1
    name: Sprint 1
    start: "2024-06-03"
    end: "2024-06-14"
    children:
      - {id: s1-design, name: Design, start: "2024-06-03", end: "2024-06-07"}
  - {id: s2, name: Sprint 2, start: "2024-06-17", end: "2024-06-28"}
  - {id: backlog, name: Backlog}
users:
  - {id: u1, name: Amy}
  - {id: u2, name: Bob}
"""


@pytest.fixture(autouse=True)
def config_repo(tmp_path, monkeypatch):
    repo = ConfigurationRepository(tmp_path / "config.yaml")
    monkeypatch.setattr(hours, "CONFIGURATION_REPO", repo)
    monkeypatch.setattr(sprint, "CONFIGURATION_REPO", repo)
    monkeypatch.setattr(configuration, "CONFIGURATION_REPO", repo)
    return repo


@pytest.fixture
def dataset_file(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text(DATASET)
    return path


def _invoke(*args):
    return runner.invoke(app, [str(arg) for arg in args], env={"COLUMNS": "200"})


def test_hours_by_week(dataset_file):
    result = _invoke(
        "hours", dataset_file, "--start", "2024-06-02", "--end", "2024-06-15", "-g", "week"
    )

    assert result.exit_code == 0, result.output
    assert "Jun 2-8, 2024" in result.output
    assert "Jun 9-15, 2024" in result.output
    assert "Bob 3.00, Amy 2.00" in result.output
    assert "Total 6.00" in result.output


def test_hours_alias_and_task_breakdown(dataset_file):
    result = _invoke(
        "h", dataset_file, "-s", "2024-06-02", "-e", "2024-06-15", "-g", "week", "--by", "task"
    )

    assert result.exit_code == 0, result.output
    assert "By task" in result.output
    assert "t1 5.00" in result.output


def test_hours_planning(dataset_file):
    result = _invoke(
        "hours", dataset_file, "-s", "2024-06-02", "-e", "2024-06-15", "-g", "week", "--planning"
    )

    assert result.exit_code == 0, result.output
    assert "Total 8.00" in result.output


def test_hours_long_custom_range_is_grouped_by_week(dataset_file):
    result = _invoke("hours", dataset_file, "-s", "2024-01-01", "-e", "2024-06-30")

    assert result.exit_code == 0, result.output
    assert "granularity: week" in result.output


def test_hours_header_shows_long_dates(dataset_file):
    result = _invoke("hours", dataset_file, "-s", "2024-06-02", "-e", "2024-06-15")

    assert result.exit_code == 0, result.output
    assert "Jun 2, 2024 to Jun 15, 2024" in result.output


def test_hours_repeated_breakdown_is_shown_once(dataset_file):
    result = _invoke(
        "hours",
        dataset_file,
        "-s",
        "2024-06-02",
        "-e",
        "2024-06-15",
        "--by",
        "user",
        "--by",
        "user,task",
    )

    assert result.exit_code == 0, result.output
    assert result.output.count("By user") == 1
    assert result.output.count("By task") == 1


def test_hours_rejects_range_with_explicit_dates(dataset_file):
    result = _invoke("hours", dataset_file, "--range", "month", "--start", "2024-06-02")

    assert result.exit_code == 2


def test_hours_rejects_unknown_granularity(dataset_file):
    result = _invoke("hours", dataset_file, "-g", "fortnight")

    assert result.exit_code == 2


def test_hours_rejects_reversed_range(dataset_file):
    result = _invoke("hours", dataset_file, "-s", "2024-06-15", "-e", "2024-06-02")

    assert result.exit_code == 2


def test_hours_reports_malformed_entry_dates(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text('entries:\n  - {id: e1, date: "2024-13-01", hours: 1}\n')

    result = _invoke("hours", path, "-s", "2024-06-01", "-e", "2024-06-30")

    assert result.exit_code == 1
    assert "Malformed date" in result.output


def test_sprints(dataset_file):
    result = _invoke("sprints", dataset_file, "--today", "2024-06-10")

    assert result.exit_code == 0, result.output
    lines = result.output.splitlines()
    sprint_1 = next(line for line in lines if "Sprint 1" in line)
    assert "active" in sprint_1
    assert "6/10 days" in sprint_1
    assert "not scheduled" in next(line for line in lines if "Backlog" in line)
    assert result.output.index("Sprint 1") < result.output.index("Sprint 2")


def test_gantt(dataset_file):
    result = _invoke(
        "gantt", dataset_file, "-t", "2024-06-10", "-s", "2024-06-01", "-e", "2024-06-21"
    )

    assert result.exit_code == 0, result.output
    assert "today at 45.0%" in result.output
    assert "Design" in result.output
    assert "Backlog" not in result.output
    assert "Chart height 160" in result.output


def test_gantt_single_day_range(dataset_file):
    result = _invoke("gantt", dataset_file, "-s", "2024-06-01", "-e", "2024-06-01")

    assert result.exit_code == 1


def test_gantt_reversed_timeline(dataset_file):
    result = _invoke(
        "gantt", dataset_file, "-t", "2024-06-10", "-s", "2024-06-30", "-e", "2024-06-01"
    )

    assert result.exit_code == 1
    assert "Chart height" not in result.output


def test_gantt_reversed_sprint(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text('periods:\n  - {id: x, name: X, start: "2024-06-10", end: "2024-06-01"}\n')

    result = _invoke(
        "gantt", path, "-t", "2024-06-05", "-s", "2024-06-01", "-e", "2024-06-30"
    )

    assert result.exit_code == 1
    assert "2024-06-10" in result.output


def test_config_set_and_view(config_repo):
    result = _invoke("config", "set", "--default-granularity", "month", "--row-unit", "24")
    assert result.exit_code == 0, result.output
    assert config_repo.path.is_file()

    result = _invoke("c", "v")
    assert result.exit_code == 0, result.output
    assert "month" in result.output
    assert "24" in result.output
