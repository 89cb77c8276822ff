"""
Tabular export of the displayed candidates (spreadsheet and clipboard text).
"""
import re
from io import BytesIO
from typing import List

import openpyxl

from ..models import Candidate

SHEET_TITLE = "Candidates"

# (header, attribute) in spreadsheet column order
XLSX_COLUMNS = [
    ("Candidate Full Name", "full_name"),
    ("JD Match %", "match_score"),
    ("JD Match Reason", "match_reason"),
    ("Email Id", "email"),
    ("Mobile Number", "mobile"),
    ("Date of Birth", "dob"),
    ("Current Company", "current_company"),
    ("Designation in Current Company", "designation"),
    ("Total Experience (Yrs)", "total_experience"),
    ("Relevant Experience (Yrs)", "relevant_experience"),
    ("Skills", "skills"),
    ("Current CTC", "current_ctc"),
    ("Expected CTC", "expected_ctc"),
    ("Notice Period", "notice_period"),
    ("Highest Qualification", "highest_qualification"),
    ("Education in/Branch/Field", "education_field"),
    ("Current Location", "current_location"),
    ("Uploaded CV/Resume", "file_name"),
]

TSV_HEADERS = [
    "Candidate Full Name", "JD Match %", "Email Id", "Mobile Number", "Date of Birth",
    "Current Company", "Designation in Current Company", "Total Experience",
    "Relevant Experience", "Skills", "Current CTC", "Expected CTC",
    "Notice Period", "Highest Qualification", "Education in/Branch/Field",
    "Current Location", "Uploaded CV/Resume",
]

_CELL_BREAKS = re.compile(r"[\t\r\n]")


def join_skills(skills: List[str]) -> str:
    return ", ".join(skills or [])


def candidates_to_xlsx(candidates: List[Candidate]) -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_TITLE
    ws.append([header for header, _ in XLSX_COLUMNS])

    for candidate in candidates:
        row = []
        for _, attr in XLSX_COLUMNS:
            value = getattr(candidate, attr)
            if attr == "skills":
                value = join_skills(value)
            row.append(value)
        ws.append(row)

    buffer = BytesIO()
    wb.save(buffer)
    wb.close()
    return buffer.getvalue()


def _tsv_cell(value) -> str:
    text = "" if value is None else str(value)
    return _CELL_BREAKS.sub(" ", text)


def candidates_to_tsv(candidates: List[Candidate]) -> str:
    """Clipboard-friendly rows; embedded tabs/newlines become single spaces."""
    lines = ["\t".join(TSV_HEADERS)]
    for c in candidates:
        match = f"{c.match_score}%" if c.match_score is not None else "N/A"
        row = [
            c.full_name, match, c.email, c.mobile, c.dob,
            c.current_company, c.designation, c.total_experience,
            c.relevant_experience, join_skills(c.skills), c.current_ctc, c.expected_ctc,
            c.notice_period, c.highest_qualification, c.education_field,
            c.current_location, c.file_name,
        ]
        lines.append("\t".join(_tsv_cell(cell) for cell in row))
    return "\n".join(lines)
