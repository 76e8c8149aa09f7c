from PIL import Image

from run_pipeline import main, parse_args


def test_parse_args_defaults(tmp_path):
    args = parse_args(["--config", str(tmp_path / "s.json")])
    assert args.root is None
    assert args.env is None
    assert args.log_level == "INFO"


def test_main_runs_pipeline(settings_file, site, monkeypatch):
    monkeypatch.chdir(site)

    assert main(["--config", str(settings_file)]) == 0

    with Image.open(site / "out" / "blog" / "photo.webp") as img:
        assert img.size == (800, 450)
    assert not (site / "static").exists()


def test_main_publishes_with_env_flag(settings_file, site):
    assert main(["--config", str(settings_file), "--root", str(site), "--env", "PRODUCTION"]) == 0
    assert (site / "static" / "assets" / "blog" / "icon.webp").exists()


def test_main_reads_env_variable(settings_file, site, monkeypatch):
    monkeypatch.setenv("ASSET_PIPELINE_ENV", "PRODUCTION")
    assert main(["--config", str(settings_file), "--root", str(site)]) == 0
    assert (site / "static" / "assets").is_dir()


def test_main_returns_nonzero_on_failed_files(settings_file, site, image_dir):
    (image_dir / "icon.jpg").write_bytes(b"garbage")

    assert main(["--config", str(settings_file), "--root", str(site)]) == 1
    assert (site / "out" / "blog" / "photo.png").exists()
