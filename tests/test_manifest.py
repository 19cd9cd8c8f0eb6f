import json

from mandelview.session import Session
from mandelview.util.manifest import build_manifest, write_manifest


def test_manifest_round_trip(tmp_path):
    manifest = build_manifest(config={"resolution": 16}, view=Session().describe(),
                              renderer_info={"resolved": "python"}, git_commit=None)
    path = tmp_path / "nested" / "run.json"
    write_manifest(str(path), manifest)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["config"] == {"resolution": 16}
    assert data["view"]["scale"] == "2^0"
    assert data["git"] == {"commit": None}
    assert "numpy" in data["packages"]
