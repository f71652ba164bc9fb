import matplotlib
matplotlib.use("Agg")

import plot_codelengths
from samples import text_like_bytes


def test_plot_writes_figure(tmp_path, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(text_like_bytes(2000, seed=1))
    out = tmp_path / "figs" / "lengths.png"
    plot_codelengths.main(["--input", str(src), "--output", str(out)])
    assert out.exists() and out.stat().st_size > 0
    assert "[plot] wrote" in capsys.readouterr().out
