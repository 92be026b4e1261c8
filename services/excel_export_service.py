"""
Excel export service for the Academic Metrics Engine
Handles Excel export of attendance statistics and grade summaries
"""

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter
from io import BytesIO

class ExcelExportService:
    """Service for exporting metrics to Excel"""

    @staticmethod
    def style_header_row(ws, row_num, columns):
        """Apply styling to header row"""
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="000000", end_color="000000", fill_type="solid")
        header_alignment = Alignment(horizontal="center", vertical="center")

        for col_num, header in enumerate(columns, 1):
            cell = ws.cell(row=row_num, column=col_num, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = header_alignment

    @staticmethod
    def auto_adjust_columns(ws):
        """Auto-adjust column widths"""
        for column in ws.columns:
            column_letter = get_column_letter(column[0].column)
            max_length = max((len(str(cell.value)) for cell in column if cell.value is not None), default=0)
            ws.column_dimensions[column_letter].width = min(max_length + 2, 50)

    @staticmethod
    def set_percentage(cell, value):
        """Write a 0-100 percentage as an Excel percentage"""
        if value is None:
            cell.value = None
            return
        cell.value = float(value) / 100
        cell.number_format = '0.00%'

    @staticmethod
    def export_section_attendance_stats(section, stats, threshold):
        """Per-student attendance statistics for a section"""
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Section Attendance"

        ExcelExportService.style_header_row(ws, 1, ['Field', 'Value'])
        ws.cell(row=2, column=1, value="Section")
        ws.cell(row=2, column=2, value=f"{section.name} ({section.code})")
        ws.cell(row=3, column=1, value="Students")
        ws.cell(row=3, column=2, value=len(stats))
        ws.cell(row=4, column=1, value=f"Below {threshold:g}%")
        ws.cell(row=4, column=2, value=sum(1 for row in stats if row['attendance_percentage'] < threshold))

        headers = ['Roll Number', 'Student Name', 'Total Classes', 'Present', 'Absent', 'Attendance %', 'Status']
        ExcelExportService.style_header_row(ws, 6, headers)

        for row_num, row in enumerate(stats, 7):
            ws.cell(row=row_num, column=1, value=row['student']['roll_number'])
            ws.cell(row=row_num, column=2, value=row['student']['name'])
            ws.cell(row=row_num, column=3, value=row['total_classes'])
            ws.cell(row=row_num, column=4, value=row['present'])
            ws.cell(row=row_num, column=5, value=row['absent'])
            ExcelExportService.set_percentage(ws.cell(row=row_num, column=6), row['attendance_percentage'])
            ws.cell(row=row_num, column=7, value='OK' if row['attendance_percentage'] >= threshold else 'Shortage')

        ExcelExportService.auto_adjust_columns(ws)
        return wb

    @staticmethod
    def export_grades_summary(student, summary):
        """Semester-wise SGPA and subject marks of a student"""
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Grades Summary"

        ExcelExportService.style_header_row(ws, 1, ['Field', 'Value'])
        ws.cell(row=2, column=1, value="Student")
        ws.cell(row=2, column=2, value=f"{student.name} ({student.roll_number})")
        ws.cell(row=3, column=1, value="CGPA")
        ws.cell(row=3, column=2, value=summary['cgpa'] if summary['cgpa'] is not None else 'Pending')

        headers = ['Semester', 'SGPA', 'Subject', 'Credits', 'Marks Obtained']
        ExcelExportService.style_header_row(ws, 5, headers)

        row_num = 6
        for semester in summary['semesters']:
            if not semester['subjects']:
                ws.cell(row=row_num, column=1, value=semester['semester_number'])
                ws.cell(row=row_num, column=2, value=semester['sgpa'])
                row_num += 1
                continue
            for subject in semester['subjects']:
                ws.cell(row=row_num, column=1, value=semester['semester_number'])
                ws.cell(row=row_num, column=2, value=semester['sgpa'])
                ws.cell(row=row_num, column=3, value=subject['subject_name'])
                ws.cell(row=row_num, column=4, value=subject['credits'])
                ws.cell(row=row_num, column=5, value=subject['marks_obtained'])
                row_num += 1

        ExcelExportService.auto_adjust_columns(ws)
        return wb

    @staticmethod
    def workbook_to_bytes(workbook):
        """Convert workbook to bytes for download"""
        output = BytesIO()
        workbook.save(output)
        output.seek(0)
        return output.getvalue()
