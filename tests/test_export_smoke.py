import matplotlib.pyplot as plt

from export import export_pdf_bytes, export_png_bytes, preview_png
from renderer import fit_single_line, render_timeline, resolve_font_family
from timeline_models import Project, Settings, sample_projects


def test_exports_produce_bytes(day0):
    projects = sample_projects(day0)
    settings = Settings(font_family="DejaVu Sans")

    preview, _ = preview_png(projects, settings, now=day0)
    assert preview[:8] == b"\x89PNG\r\n\x1a\n"

    png = export_png_bytes(projects, settings, dpi=300, now=day0)
    assert png[:8] == b"\x89PNG\r\n\x1a\n"
    assert len(png) > len(preview)

    pdf = export_pdf_bytes(projects, settings, now=day0)
    assert pdf[:4] == b"%PDF"


def test_empty_collection_renders(day0):
    png, warnings = preview_png([], Settings(), now=day0)
    assert png[:8] == b"\x89PNG\r\n\x1a\n"
    assert warnings == []


def test_inverted_projects_are_drawn_and_reported(day):
    projects = [
        Project(description="Fine", start_date=day(0), end_date=day(4)),
        Project(description="Backwards", start_date=day(5), end_date=day(2)),
    ]
    fig, warnings = render_timeline(projects, Settings(), now=day(0))
    try:
        assert len(warnings) == 1
        assert "Backwards" in warnings[0]
        ax = fig.axes[0]
        assert len(ax.patches) == 2
        labels = {t.get_text() for t in ax.texts}
        assert "Dec 9" in labels
    finally:
        plt.close(fig)


def test_figure_is_sized_in_canvas_units(day0):
    settings = Settings(width=600.0, padding=10.0, dpi=100)
    fig, _ = render_timeline(sample_projects(day0), settings, now=day0)
    try:
        w, h = fig.get_size_inches() * fig.dpi
        assert round(w) == 620
        assert round(h) == 200
    finally:
        plt.close(fig)


def test_fit_single_line_truncates_with_ellipsis():
    assert fit_single_line("Short", 200.0, 12.0) == "Short"
    out = fit_single_line("A rather long project description", 40.0, 12.0)
    assert out.endswith("…")
    assert len(out) == int(40.0 / (12.0 * 0.55))
    assert fit_single_line("Anything", 2.0, 12.0) == ""


def test_font_family_falls_back():
    assert resolve_font_family("No Such Font Family 123") in ("Arial", "DejaVu Sans")
