import json
import sys

import main


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["gold-purchase", *args])
    main.main()


def test_quiet_project_costs(monkeypatch, capsys):
    run_cli(monkeypatch, "--kind", "project", "--min", "100", "--max", "200", "-q")

    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["100\t230", "150\t300", "200\t370"]


def test_export_with_catalog(monkeypatch, tmp_path):
    catalog_path = tmp_path / "catalog.json"
    catalog_path.write_text(
        json.dumps(
            {
                "technologies": [
                    {"id": "TECH_A", "column": 0, "name": "A"},
                    {"id": "TECH_B", "column": 1, "name": "B"},
                ],
                "buildings": [
                    {
                        "id": "BUILDING_EXCHANGE",
                        "name": "Exchange",
                        "cost": 100,
                        "prereq_tech": "TECH_B",
                        "help": "-20% [ICON_GOLD] Gold cost for Purchase or Investment",
                    }
                ],
            }
        )
    )
    export_path = tmp_path / "costs.json"

    run_cli(
        monkeypatch,
        "--kind",
        "building",
        "--min",
        "100",
        "--max",
        "100",
        "--catalog",
        str(catalog_path),
        "--hurry-source",
        "BUILDING_EXCHANGE",
        "--hurry-source",
        "POLICY_COMMERCE",
        "--export",
        str(export_path),
    )

    exported = json.loads(export_path.read_text())
    assert exported["hurry_modifier"] == -25
    assert exported["hurry_sources"] == ["BUILDING_EXCHANGE", "POLICY_COMMERCE"]
    (row,) = exported["rows"]
    assert row["production"] == 100
    assert row["column"] == 1
    assert row["tech_progress"] == 100
    assert row["gold"] % 10 == 0


def test_repeated_hurry_source_counts_once(monkeypatch, tmp_path):
    export_path = tmp_path / "costs.json"

    run_cli(
        monkeypatch,
        "--kind",
        "project",
        "--min",
        "100",
        "--max",
        "100",
        "-q",
        "--hurry-source",
        "POLICY_COMMERCE",
        "--hurry-source",
        "POLICY_CARAVANS",
        "--hurry-source",
        "POLICY_COMMERCE",
        "--export",
        str(export_path),
    )

    exported = json.loads(export_path.read_text())
    assert exported["hurry_sources"] == ["POLICY_COMMERCE", "POLICY_CARAVANS"]
    assert exported["hurry_modifier"] == -10
