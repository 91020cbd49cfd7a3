"""
Card layouts for the two outputs:

 - streak card       (total contributions · current streak · longest streak)
 - contributor card  (top contributed repositories with a star rank badge)

Both use a fixed dark theme and fixed layout constants; only the number of
rows on the contributor card changes the card height.
"""
import datetime
from typing import List, NamedTuple, Optional

from contrib_cards.models import RepoContribution, StreakStats
from contrib_cards.svg import Circle, ClipPath, Document, Ellipse, Group, Icon, Line, Mask, Path, Rect, Text

MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

STREAK_FONT = '"Segoe UI", Ubuntu, sans-serif'
REPO_FONT = "-apple-system,BlinkMacSystemFont,'Segoe UI',Helvetica,Arial,sans-serif"

# Fire icon drawn above the current streak ring
FIRE_PATH = (
    "M 1.5 0.67 C 1.5 0.67 2.24 3.32 2.24 5.47 C 2.24 7.53 0.89 9.2 -1.17 9.2 "
    "C -3.23 9.2 -4.79 7.53 -4.79 5.47 L -4.76 5.11 C -6.78 7.51 -8 10.62 -8 13.99 "
    "C -8 18.41 -4.42 22 0 22 C 4.42 22 8 18.41 8 13.99 C 8 8.6 5.41 3.79 1.5 0.67 Z "
    "M -0.29 19 C -2.07 19 -3.51 17.6 -3.51 15.86 C -3.51 14.24 -2.46 13.1 -0.7 12.74 "
    "C 1.07 12.38 2.9 11.53 3.92 10.16 C 4.31 11.45 4.51 12.81 4.51 14.2 "
    "C 4.51 16.85 2.36 19 -0.29 19 Z"
)
# Octicons (16x16)
STAR_PATH = (
    "M8 .25a.75.75 0 01.673.418l1.882 3.815 4.21.612a.75.75 0 01.416 1.279l-3.046 2.97.719 "
    "4.192a.75.75 0 01-1.088.791L8 12.347l-3.766 1.98a.75.75 0 01-1.088-.79l.72-4.194L.818 "
    "6.374a.75.75 0 01.416-1.28l4.21-.611L7.327.668A.75.75 0 018 .25z"
)
HISTORY_PATH = (
    "M1.643 3.143L.427 1.927A.25.25 0 000 2.104V5.75c0 .138.112.25.25.25h3.646a.25.25 0 "
    "00.177-.427L2.715 4.215a6.5 6.5 0 11-1.18 4.458.75.75 0 10-1.493.154 8.001 8.001 0 "
    "101.6-5.684zM7.75 4a.75.75 0 01.75.75v2.992l2.028.812a.75.75 0 01-.557 1.392l-2.5-1A.75.75 "
    "0 017 8.25v-3.5A.75.75 0 017.75 4z"
)

STREAK_CSS = """
    @keyframes currstreak {
      0% { font-size: 3px; opacity: 0.2; }
      80% { font-size: 34px; opacity: 1; }
      100% { font-size: 28px; opacity: 1; }
    }
    @keyframes fadein {
      0% { opacity: 0; }
      100% { opacity: 1; }
    }
  """

REPO_CSS = """
    @keyframes fadeIn {
      from { opacity: 0; transform: translateY(5px); }
      to { opacity: 1; transform: translateY(0); }
    }
    .card { animation: fadeIn 0.8s ease-in-out; }
  """


class Rank(NamedTuple):
    label: str
    color: str


# ---------------------------
# Formatting helpers
# ---------------------------
def format_date(d: datetime.date) -> str:
    """Jan 5, 2024"""
    return f"{MONTHS[d.month - 1]} {d.day}, {d.year}"


def format_date_short(d: datetime.date) -> str:
    """Jan 5"""
    return f"{MONTHS[d.month - 1]} {d.day}"


def format_number(n: int) -> str:
    return f"{n:,}"


def format_compact(n: int) -> str:
    """1234 -> '1.2k', 1000 -> '1k', 999 -> '999'."""
    if n >= 1000:
        s = f"{n / 1000:.1f}"
        if s.endswith(".0"):
            s = s[:-2]
        return s + "k"
    return str(n)


def rank_for_stars(stars: int) -> Rank:
    if stars >= 10000:
        return Rank("S+", "#e4b669")
    if stars >= 1000:
        return Rank("S", "#e4b669")
    if stars >= 500:
        return Rank("A+", "#69c46d")
    if stars >= 100:
        return Rank("A", "#69c46d")
    if stars >= 50:
        return Rank("B+", "#6cb6ff")
    return Rank("B", "#6cb6ff")


def truncate_name(name: str, limit: int = 38) -> str:
    if len(name) > limit:
        return name[:limit - 3] + "..."
    return name


def _range(start: Optional[datetime.date], end: Optional[datetime.date], length: int, empty: str) -> str:
    if length > 0 and start and end:
        return f"{format_date_short(start)} - {format_date_short(end)}"
    return empty


# ---------------------------
# Streak card
# ---------------------------
STREAK_WIDTH = 495
STREAK_HEIGHT = 195
COL_WIDTH = STREAK_WIDTH / 3

BG = "#151515"
BORDER = "#E4E2E2"
TEXT_PRIMARY = "#FEFEFE"
TEXT_SECONDARY = "#9E9E9E"
ACCENT = "#FB8C00"


def _streak_text(x: float, y: float, text: str, fill: str, weight: int, size: int, style: str) -> Text:
    return Text(x, y, text, attrs={
        "stroke-width": 0,
        "text-anchor": "middle",
        "fill": fill,
        "stroke": "none",
        "font-family": STREAK_FONT,
        "font-weight": weight,
        "font-size": f"{size}px",
        "font-style": "normal",
        "style": style,
    })


def _fade(delay: float) -> str:
    return f"opacity: 0; animation: fadein 0.5s linear forwards {delay}s"


def build_streak_card(stats: StreakStats) -> Document:
    """
    Lay out the three-column streak card.

    Left: total contributions since the first contribution. Middle: current
    streak inside an accent ring with a fire icon. Right: longest streak.
    """
    doc = Document(STREAK_WIDTH, STREAK_HEIGHT, attrs={
        "xmlns:xlink": "http://www.w3.org/1999/xlink",
        "style": "isolation: isolate",
        "direction": "ltr",
    })
    doc.style = STREAK_CSS
    doc.define(ClipPath("outer_rectangle", [Rect(width=STREAK_WIDTH, height=STREAK_HEIGHT, rx=4.5)]))
    doc.define(Mask("ringMask", [
        Rect(x=0, y=0, width=STREAK_WIDTH, height=STREAK_HEIGHT, attrs={"fill": "white"}),
        Ellipse(COL_WIDTH * 1.5, 36, 13, 18, attrs={"fill": "black"}),
    ]))

    card = doc.add(Group(attrs={"clip-path": "url(#outer_rectangle)"}))
    card.add(Rect(
        x=0.5, y=0.5, width=STREAK_WIDTH - 1, height=STREAK_HEIGHT - 1, rx=4.5, ry=4.5,
        attrs={"fill": BG, "stroke": BORDER, "stroke-width": 1},
    ))
    for x in (COL_WIDTH, COL_WIDTH * 2):
        card.add(Line(x, 28, x, 170, attrs={
            "vector-effect": "non-scaling-stroke",
            "stroke-width": 1,
            "stroke": BORDER,
            "stroke-linejoin": "miter",
            "stroke-linecap": "square",
            "stroke-miterlimit": 3,
        }))

    # Total contributions
    left = COL_WIDTH * 0.5
    card.add(_streak_text(left, 79, format_number(stats.total_contributions), TEXT_PRIMARY, 700, 28, _fade(0.5)))
    card.add(_streak_text(left, 130, "Total Contributions", TEXT_PRIMARY, 400, 14, _fade(0.65)))
    card.add(_streak_text(left, 158, f"{format_date(stats.first_contribution_date)} - Present",
                          TEXT_SECONDARY, 400, 12, _fade(0.8)))

    # Current streak
    mid = COL_WIDTH * 1.5
    ring = card.add(Group(attrs={"style": "animation: fadein 0.5s linear forwards 0.4s; opacity: 0"}))
    ring.add(Circle(mid, 72, 40, attrs={
        "fill": "none", "stroke": ACCENT, "stroke-width": 5, "stroke-linecap": "round", "mask": "url(#ringMask)",
    }))
    fire = card.add(Group(attrs={"style": "animation: fadein 0.5s linear forwards 0.6s; opacity: 0"}))
    fire.add(Group([Path(FIRE_PATH, attrs={"fill": ACCENT})], attrs={"transform": f"translate({mid:g}, 18)"}))
    card.add(_streak_text(mid, 79, format_number(stats.current_streak), TEXT_PRIMARY, 700, 28,
                          "animation: currstreak 0.6s linear forwards"))
    card.add(_streak_text(mid, 130, "Current Streak", ACCENT, 400, 14, _fade(0.9)))
    card.add(_streak_text(mid, 158, _range(stats.current_streak_start, stats.current_streak_end,
                                           stats.current_streak, "No active streak"),
                          TEXT_SECONDARY, 400, 12, _fade(0.9)))

    # Longest streak
    right = COL_WIDTH * 2.5
    card.add(_streak_text(right, 79, format_number(stats.longest_streak), TEXT_PRIMARY, 700, 28, _fade(0.5)))
    card.add(_streak_text(right, 130, "Longest Streak", TEXT_PRIMARY, 400, 14, _fade(0.65)))
    card.add(_streak_text(right, 158, _range(stats.longest_streak_start, stats.longest_streak_end,
                                             stats.longest_streak, "N/A"),
                          TEXT_SECONDARY, 400, 12, _fade(0.8)))
    return doc


# ---------------------------
# Contributor card
# ---------------------------
ROW_HEIGHT = 70
PADDING_TOP = 35
PADDING_BOTTOM = 20
REPO_WIDTH = 450


def _repo_text(x: float, y: float, text: str, fill: str, size: int, weight: Optional[int] = None,
               anchor: Optional[str] = None) -> Text:
    return Text(x, y, text, attrs={
        "text-anchor": anchor,
        "fill": fill,
        "font-size": size,
        "font-weight": weight,
        "font-family": REPO_FONT,
    })


def _repo_row(repo: RepoContribution, y: int, last: bool) -> Group:
    rank = rank_for_stars(repo.stargazer_count)
    row = Group(attrs={"transform": f"translate(0, {y})"})

    badge = row.add(Group(attrs={"transform": "translate(20, 8)"}))
    badge.add(Rect(width=40, height=26, rx=13, attrs={"fill": rank.color, "opacity": 0.15}))
    badge.add(_repo_text(20, 17, rank.label, rank.color, 12, weight=700, anchor="middle"))

    row.add(_repo_text(72, 22, truncate_name(repo.name_with_owner), "#c9d1d9", 14, weight=600))

    stars = row.add(Group(attrs={"transform": "translate(72, 36)"}))
    stars.add(Icon(14, 14, "0 0 16 16", [Path(STAR_PATH)], attrs={"fill": "#8b949e"}))
    stars.add(_repo_text(18, 11, format_compact(repo.stargazer_count), "#8b949e", 12))

    contributions = row.add(Group(attrs={"transform": "translate(160, 36)"}))
    contributions.add(Icon(14, 14, "0 0 16 16", [Path(HISTORY_PATH)], attrs={"fill": "#8b949e"}))
    contributions.add(_repo_text(18, 11, f"{format_compact(repo.contribution_count)} contributions", "#8b949e", 12))

    if not last:
        row.add(Line(20, 62, REPO_WIDTH - 20, 62, attrs={"stroke": "#21262d", "stroke-width": 1}))
    return row


def build_contributor_card(repos: List[RepoContribution]) -> Document:
    """Lay out one 70px row per repository under a centered title."""
    height = PADDING_TOP + len(repos) * ROW_HEIGHT + PADDING_BOTTOM
    doc = Document(REPO_WIDTH, height)
    doc.style = REPO_CSS
    doc.add(Rect(width=REPO_WIDTH, height=height, rx=6, attrs={"fill": "#0d1117", "stroke": "#30363d", "stroke-width": 1}))
    doc.add(_repo_text(REPO_WIDTH / 2, 24, "Top Contributed Repositories", "#c9d1d9", 14, weight=600, anchor="middle"))
    rows = doc.add(Group(attrs={"class": "card"}))
    for i, repo in enumerate(repos):
        rows.add(_repo_row(repo, PADDING_TOP + i * ROW_HEIGHT, last=i == len(repos) - 1))
    return doc
