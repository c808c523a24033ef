import base64
import json
import logging

import gspread
from django.conf import settings
from google.oauth2.service_account import Credentials

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]

HEADERS = [
    "Report ID", "Student", "Email", "Project Title", "Week",
    "Status", "Marks", "Comments", "Submitted At",
]


def get_google_credentials():
    """Load Google credentials from BASE64 environment variable"""
    data = settings.GOOGLE_SHEET_CREDENTIALS_BASE64
    if not data:
        raise ValueError("GOOGLE_SHEET_CREDENTIALS_BASE64 not found in environment.")

    creds_dict = json.loads(base64.b64decode(data))
    return Credentials.from_service_account_info(creds_dict, scopes=SCOPES)


def report_row(report):
    return [
        report.id,
        report.student_name,
        report.student.email or "",
        report.project_title,
        report.report_week,
        report.approval_status,
        report.marks if report.marks is not None else "",
        report.comments or "",
        report.created_at.strftime("%Y-%m-%d %H:%M:%S"),
    ]


def export_reports_to_google_sheet(reports):
    """Append ``reports`` to the configured sheet; returns the row count."""
    client = gspread.authorize(get_google_credentials())
    sheet = client.open(settings.GOOGLE_SHEET_NAME).sheet1

    if not sheet.get_all_values():
        sheet.append_row(HEADERS)

    rows = [report_row(report) for report in reports]
    if rows:
        sheet.append_rows(rows)

    logger.info(f"[Export] {len(rows)} weekly report(s) exported to '{settings.GOOGLE_SHEET_NAME}'")
    return len(rows)
