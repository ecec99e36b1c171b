import json

import pytest

from paint_estimator import main as main_module
from paint_estimator.config import Config


@pytest.fixture
def inputs(tmp_path):
    configs = tmp_path / "configs.json"
    configs.write_text(json.dumps({"configurations": [
        {"id": "w1", "areaType": "Wall", "label": "Hall", "area": 500, "perSqFtRate": 20,
         "selectedMaterials": {"putty": "AP TruCare Wall Putty"},
         "coatConfiguration": {"putty": 2, "primer": 0, "emulsion": 0}},
    ]}))
    coverage = tmp_path / "coverage.json"
    coverage.write_text(json.dumps([
        {"productName": "AP TruCare Wall Putty", "coats": "2 coats", "coverageRange": "10-12"},
    ]))
    pricing = tmp_path / "pricing.json"
    pricing.write_text(json.dumps([
        {"productName": "AP TruCare Wall Putty", "sizes": {"20kg": 1000, "5kg": 300}},
    ]))
    return configs, coverage, pricing


def test_main_writes_estimate(tmp_path, monkeypatch, inputs):
    configs, coverage, pricing = inputs
    out_dir = tmp_path / "out"
    monkeypatch.setattr(Config, "OUTPUT_DIR", str(out_dir))

    code = main_module.main([
        "--configs", str(configs),
        "--coverage", str(coverage),
        "--pricing", str(pricing),
        "--settings", str(tmp_path / "absent.yaml"),
        "--output", "hall",
    ])

    assert code == 0
    data = json.loads((out_dir / "hall.json").read_text())
    assert data["material_cost"] == 2600
    assert data["margin_cost"] == pytest.approx(1000)
    assert data["labour"]["total_days"] == 3
    assert data["groups"][0]["materials"][0]["pack_combination"]["lines"][0]["pack_size_label"] == "20kg"


def test_main_rejects_invalid_configuration(tmp_path, monkeypatch, inputs):
    _, coverage, pricing = inputs
    configs = tmp_path / "bad.json"
    configs.write_text(json.dumps([{"id": "w1", "areaType": "Wall", "area": -20}]))
    monkeypatch.setattr(Config, "OUTPUT_DIR", str(tmp_path / "out"))

    code = main_module.main(["--configs", str(configs), "--coverage", str(coverage), "--pricing", str(pricing)])

    assert code == 2
    assert not (tmp_path / "out").exists()


def test_run_estimate_manual_mode(tmp_path, inputs):
    configs, coverage, pricing = inputs

    result = main_module.run_estimate(
        str(configs), str(coverage), str(pricing),
        labour_mode="manual", days=1, dealer_margin=10,
        settings_path=str(tmp_path / "absent.yaml"),
    )

    # 1000 sq.ft of putty at 350 sq.ft/day in one day
    assert result.labour.laborers == 3
    assert result.labour.total_days == 1
    assert result.dealer_margin.margin_cost == pytest.approx(260)


def test_main_can_log_to_file(tmp_path, monkeypatch, inputs):
    configs, coverage, pricing = inputs
    monkeypatch.setattr(Config, "OUTPUT_DIR", str(tmp_path / "out"))
    monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path / "logs"))

    code = main_module.main([
        "--configs", str(configs), "--coverage", str(coverage), "--pricing", str(pricing),
        "--log-file", "run.log",
    ])

    assert code == 0
    assert "Estimate written to" in (tmp_path / "logs" / "run.log").read_text()
