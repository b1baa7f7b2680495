import sqlite3

from blog_backend import cli
from blog_backend.config import DEFAULTS, read_config


def test_read_config_defaults_when_missing(tmp_path):
    cfg = read_config(str(tmp_path / "absent.yaml"))
    assert cfg == DEFAULTS


def test_read_config_values(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("db_path: ' data/blog.db '\npage_size: 25\nlog_level: debug\nextra: 1\n", encoding="utf-8")
    cfg = read_config(str(p))
    assert cfg["db_path"] == "data/blog.db"
    assert cfg["page_size"] == 25
    assert cfg["log_level"] == "DEBUG"
    assert "extra" not in cfg


def test_read_config_bad_values_fall_back(tmp_path):
    p = tmp_path / "config.yaml"
    p.write_text("page_size: lots\ndb_path: 3\n", encoding="utf-8")
    cfg = read_config(str(p))
    assert cfg["page_size"] == DEFAULTS["page_size"]
    assert cfg["db_path"] is None

    p.write_text("[unclosed", encoding="utf-8")
    assert read_config(str(p)) == DEFAULTS


def test_cli_init_creates_tables(tmp_path, monkeypatch, tmp_db_path):
    db = tmp_path / "fresh.db"
    monkeypatch.setenv("BLOG_DB_PATH", str(db))
    cli.main(["init"])
    conn = sqlite3.connect(str(db))
    try:
        names = {r[0] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    finally:
        conn.close()
    assert {"blog_posts", "blog_categories", "blog_post_categories"} <= names


def test_cli_latest(seed, capsys):
    cli.main(["latest", "--count", "2"])
    out = capsys.readouterr().out
    assert "going-abroad" in out
    assert "april-update" in out
    assert "hello-world" not in out


def test_cli_archive_csv(seed, tmp_path, capsys):
    out_csv = tmp_path / "exports" / "archive.csv"
    cli.main(["archive", "--csv", str(out_csv)])
    out = capsys.readouterr().out
    assert "Posts per month" in out
    lines = out_csv.read_text(encoding="utf-8-sig").strip().splitlines()
    assert lines[0] == "year,month,count"
    assert lines[1:] == ["2022,1,1", "2021,4,1", "2021,3,2", "2020,12,1"]


def test_archive_frame_empty():
    df = cli.archive_frame({})
    assert df.empty
    assert list(df.columns) == ["year", "month", "count"]
