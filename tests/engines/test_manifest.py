import json
from pathlib import Path

from diffcov.core.config import AggregatedConfig, ReportFormats, ReportsConfig, ResolvedDiffSource
from diffcov.engines.manifest import DIFF_COPY_FILE, DIFF_SOURCE_FILE, MANIFEST_FILE, ManifestReportEngine
from diffcov.thresholds.types import ThresholdSet


def make_config(report_dir: Path, diff_source: ResolvedDiffSource) -> AggregatedConfig:
    return AggregatedConfig(
        report_name="diff-coverage",
        output_dir=report_dir,
        diff_source=diff_source,
        reports=ReportsConfig.from_formats(report_dir, ReportFormats(xml=False)),
        thresholds=ThresholdSet(min_lines=0.8),
        exec_files=frozenset({Path("/repo/app/target/jacoco.exec")}),
        class_files=frozenset({Path("/repo/b2"), Path("/repo/b1")}),
        source_dirs=frozenset({Path("/repo/app/src/main/java")}),
    )


def test_file_diff_is_copied(tmp_path):
    patch_file = tmp_path / "changes.patch"
    patch_file.write_text("--- a/x\n+++ b/x\n", encoding="utf-8")
    report_dir = tmp_path / "out"
    cfg = make_config(report_dir, ResolvedDiffSource(file=str(patch_file)))

    saved = ManifestReportEngine().save_diff_to_dir(cfg, report_dir)

    assert saved == report_dir / DIFF_COPY_FILE
    assert saved.read_text(encoding="utf-8") == patch_file.read_text(encoding="utf-8")


def test_git_diff_source_is_recorded(tmp_path):
    report_dir = tmp_path / "out"
    cfg = make_config(report_dir, ResolvedDiffSource(git="origin/main"))

    saved = ManifestReportEngine().save_diff_to_dir(cfg, report_dir)

    assert saved == report_dir / DIFF_SOURCE_FILE
    assert saved.read_text(encoding="utf-8") == "git: origin/main\n"


def test_create_writes_deterministic_manifest(tmp_path):
    report_dir = tmp_path / "out"
    cfg = make_config(report_dir, ResolvedDiffSource(url="http://ci/diff"))
    engine = ManifestReportEngine()

    engine.create(cfg)
    first = (report_dir / MANIFEST_FILE).read_text(encoding="utf-8")
    engine.create(cfg)
    second = (report_dir / MANIFEST_FILE).read_text(encoding="utf-8")

    assert first == second
    data = json.loads(first)
    assert data["classFiles"] == ["/repo/b1", "/repo/b2"]
    assert data["diffSource"] == {"file": "", "url": "http://ci/diff", "git": ""}
    assert data["violations"]["minLines"] == 0.8
    assert set(data["enabledReports"]) == {"html", "csv"}
    assert len(data["_hash"]) == 64
