"""PDF export of stored quiz reports."""

import io
from datetime import datetime
from typing import List, Union
from xml.sax.saxutils import escape

from reportlab.lib.colors import HexColor, white
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from quizreport.schemas import InsightProfile, ReportData

BLUE = HexColor("#3B82F6")
GREEN = HexColor("#107C10")
RED = HexColor("#DC2626")
GREY = HexColor("#6B7280")
GREY_L = HexColor("#F9FAFB")
DARK = HexColor("#111827")

COLOR_SWATCHES = {
    "red": HexColor("#DC2626"),
    "yellow": HexColor("#EAB308"),
    "green": HexColor("#16A34A"),
    "blue": HexColor("#2563EB"),
}


def make_styles():
    base = getSampleStyleSheet()
    return dict(
        title=ParagraphStyle(
            "Title", parent=base["Heading1"], fontSize=20, textColor=BLUE, alignment=TA_CENTER, spaceAfter=6
        ),
        h2=ParagraphStyle(
            "H2", parent=base["Heading2"], fontSize=14, textColor=BLUE, spaceBefore=12, spaceAfter=6
        ),
        body=ParagraphStyle("Body", parent=base["Normal"], fontSize=10, textColor=DARK, leading=14, spaceAfter=4),
        meta=ParagraphStyle("Meta", parent=base["Normal"], fontSize=9, textColor=GREY, alignment=TA_CENTER),
        bullet=ParagraphStyle(
            "Bullet", parent=base["Normal"], fontSize=9.5, textColor=DARK, leading=13, leftIndent=14, bulletIndent=4
        ),
    )


def _markdown_line(line: str) -> str:
    """Escape for reportlab markup and turn ``**bold**`` pairs into <b> tags."""
    parts = escape(line).split("**")
    out = []
    for idx, part in enumerate(parts):
        out.append(f"<b>{part}</b>" if idx % 2 == 1 else part)
    return "".join(out)


def _text_block(text: str, style) -> List:
    return [Paragraph(_markdown_line(line), style) for line in text.splitlines() if line.strip()]


def _bullets(items: List[str], style) -> List:
    return [Paragraph(_markdown_line(item), style, bulletText="-") for item in items]


def _table(data, col_widths, header_bg=BLUE):
    table = Table(data, colWidths=col_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), header_bg),
                ("TEXTCOLOR", (0, 0), (-1, 0), white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [white, GREY_L]),
                ("GRID", (0, 0), (-1, -1), 0.5, HexColor("#D1D5DB")),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ]
        )
    )
    return table


def _score_story(report: ReportData, styles) -> List:
    minutes, seconds = divmod(report.time_spent, 60)
    verdict_color = GREEN if report.pass_status == "pass" else RED
    story = [
        Paragraph("Score Summary", styles["h2"]),
        _table(
            [
                ["Score", "Correct", "Time", "Result"],
                [
                    f"{report.score}%",
                    f"{report.correct_answers}/{report.total_questions}",
                    f"{minutes}m {seconds:02d}s",
                    report.pass_status.upper(),
                ],
            ],
            [40 * mm, 40 * mm, 40 * mm, 40 * mm],
            header_bg=verdict_color,
        ),
    ]

    if report.weak_areas:
        story.append(Paragraph("Areas to Improve", styles["h2"]))
        rows = [["Category", "Correct %", "Wrong", "Total"]]
        rows.extend(
            [w.category, f"{w.percentage}%", str(w.wrong_count), str(w.total_count)]
            for w in report.weak_areas
        )
        story.append(_table(rows, [80 * mm, 30 * mm, 25 * mm, 25 * mm], header_bg=RED))

    if report.strengths:
        story.append(Paragraph("Strengths", styles["h2"]))
        story.extend(_bullets(report.strengths, styles["bullet"]))

    story.append(Paragraph("Recommendations", styles["h2"]))
    story.extend(_text_block(report.recommendations, styles["body"]))

    if report.detailed_answers:
        story.append(Paragraph("Detailed Answers", styles["h2"]))
        rows = [["Question", "Your answer", "Correct", ""]]
        for answer in report.detailed_answers:
            rows.append(
                [
                    Paragraph(escape(answer.question), styles["body"]),
                    answer.user_answer,
                    answer.correct_answer,
                    "OK" if answer.is_correct else "X",
                ]
            )
        story.append(_table(rows, [100 * mm, 25 * mm, 25 * mm, 10 * mm]))
    return story


def _insight_story(profile: InsightProfile, styles) -> List:
    rows = [["Energy", "Answers", "Share"]]
    rows.extend([score.name, str(score.count), f"{score.percentage}%"] for score in profile.color_scores)
    table = _table(rows, [70 * mm, 30 * mm, 30 * mm], header_bg=COLOR_SWATCHES.get(profile.dominant_color.color, BLUE))

    story = [
        Paragraph(f"Profile: {escape(profile.profile_type)}", styles["h2"]),
        table,
        Paragraph("About the Model", styles["h2"]),
        *_text_block(profile.methodological_introduction, styles["body"]),
        Paragraph("Profile Description", styles["h2"]),
        *_text_block(profile.detailed_analysis.profile_description, styles["body"]),
        Paragraph("Strengths", styles["h2"]),
        *_bullets(profile.strengths, styles["bullet"]),
        Paragraph("Development Areas", styles["h2"]),
        *_bullets(profile.development_areas, styles["bullet"]),
        Paragraph("Working Style", styles["h2"]),
        Paragraph(escape(profile.working_style), styles["body"]),
        Paragraph("Communication Style", styles["h2"]),
        Paragraph(escape(profile.communication_style), styles["body"]),
        Paragraph("Value to the Team", styles["h2"]),
        *_bullets(profile.team_value, styles["bullet"]),
        Paragraph("Communication Obstacles", styles["h2"]),
        *_bullets(profile.communication_obstacles, styles["bullet"]),
        Paragraph("Your Opposite Type", styles["h2"]),
        Paragraph(escape(profile.opposite_type.description), styles["body"]),
        *_bullets(profile.opposite_type.differences, styles["bullet"]),
        Paragraph("Recommendations", styles["h2"]),
        *_text_block(profile.recommendations, styles["body"]),
        Paragraph("Action Plan", styles["h2"]),
    ]
    for line in profile.detailed_analysis.action_plan:
        story.extend(_text_block(line, styles["body"]))
    return story


def render_report_pdf(
    *,
    quiz_title: str,
    user_id: str,
    created_at: datetime | None,
    report: Union[ReportData, InsightProfile],
) -> bytes:
    styles = make_styles()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=18 * mm,
        rightMargin=18 * mm,
        topMargin=16 * mm,
        bottomMargin=16 * mm,
        title=f"Quiz Report - {quiz_title}",
    )

    date_text = (created_at or datetime.utcnow()).strftime("%d %B %Y")
    story = [
        Paragraph(escape(quiz_title), styles["title"]),
        Paragraph(f"Report for {escape(user_id)} - {date_text}", styles["meta"]),
        Spacer(1, 4 * mm),
        HRFlowable(width="100%", thickness=1, color=BLUE, spaceAfter=6),
    ]
    if isinstance(report, InsightProfile):
        story.extend(_insight_story(report, styles))
    else:
        story.extend(_score_story(report, styles))

    doc.build(story)
    return buffer.getvalue()
