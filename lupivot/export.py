"""
Excel export of finished decompositions.

Writes one worksheet per decomposition with the L and U factors, the
permutation table, the swap count and, when the original matrix is known,
the reconstruction error.
"""
import io
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd
import xlsxwriter

from .comparator import compare_reconstruction
from .decomposition import Decomposition
from .presenter import lower_frame, permutation_frame, upper_frame

MAX_SHEET_NAME = 31


class LUExcelExporter:
    """
    Collects decompositions and renders them into one workbook.

    Usage:
        exporter = LUExcelExporter()
        exporter.add_decomposition(result, label="A", original=rows)
        exporter.save("reports/lu.xlsx")
    """

    def __init__(self):
        self.entries: List[Tuple[str, Decomposition, Optional[List[List[float]]]]] = []

    def add_decomposition(
        self,
        decomposition: Decomposition,
        label: str = "",
        original: Optional[Sequence[Sequence[float]]] = None,
    ) -> None:
        rows = [list(row) for row in original] if original is not None else None
        self.entries.append((label or f"Matrix {len(self.entries) + 1}", decomposition, rows))

    def _create_formats(self, workbook):
        return {
            "header": workbook.add_format({
                'bold': True, 'bg_color': '#D9E1F2', 'border': 1,
                'align': 'center', 'valign': 'vcenter',
            }),
            "title": workbook.add_format({
                'bold': True, 'font_size': 12, 'bg_color': '#4472C4',
                'font_color': 'white', 'border': 1,
            }),
            "number": workbook.add_format({'num_format': '0.000000', 'border': 1}),
            "sci": workbook.add_format({'num_format': '0.00E+00', 'border': 1}),
            "integer": workbook.add_format({'num_format': '0', 'border': 1}),
            "text": workbook.add_format({'border': 1, 'align': 'left'}),
        }

    def _write_title(self, worksheet, row: int, width: int, title: str, formats) -> None:
        if width > 1:
            worksheet.merge_range(row, 0, row, width - 1, title, formats["title"])
        else:
            worksheet.write(row, 0, title, formats["title"])

    def _write_table(self, worksheet, start_row: int, title: str, df: pd.DataFrame, formats, index: bool) -> int:
        """Write ``df`` below a title bar and return the next free row."""
        width = len(df.columns) + (1 if index else 0)
        self._write_title(worksheet, start_row, width, title, formats)
        row = start_row + 1

        col_offset = 1 if index else 0
        if index:
            worksheet.write(row, 0, "", formats["header"])
        for col_num, value in enumerate(df.columns):
            worksheet.write(row, col_num + col_offset, str(value), formats["header"])
        row += 1

        for label, record in df.iterrows():
            if index:
                worksheet.write(row, 0, str(label), formats["header"])
            for col_num, value in enumerate(record.tolist()):
                cell_fmt = formats["integer"] if isinstance(value, int) else formats["number"]
                worksheet.write(row, col_num + col_offset, value, cell_fmt)
            row += 1
        return row + 1

    def _sheet_name(self, label: str, used: set) -> str:
        base = "".join(ch for ch in label if ch not in '[]:*?/\\')[:MAX_SHEET_NAME] or "Matrix"
        name = base
        counter = 2
        while name.lower() in used:
            suffix = f" ({counter})"
            name = base[:MAX_SHEET_NAME - len(suffix)] + suffix
            counter += 1
        used.add(name.lower())
        return name

    def _write_decomposition(self, workbook, formats, name: str, label: str,
                             decomposition: Decomposition, original) -> None:
        ws = workbook.add_worksheet(name)
        ws.set_column(0, decomposition.n, 14)

        ws.write(0, 0, "Label", formats["header"])
        ws.write(0, 1, label, formats["text"])
        ws.write(1, 0, "Size", formats["header"])
        ws.write(1, 1, decomposition.n, formats["integer"])
        ws.write(2, 0, "Swaps", formats["header"])
        ws.write(2, 1, decomposition.swaps, formats["integer"])
        ws.write(3, 0, "Tolerance", formats["header"])
        ws.write(3, 1, decomposition.tolerance, formats["sci"])
        ws.write(4, 0, "Determinant", formats["header"])
        ws.write(4, 1, decomposition.determinant(), formats["sci"])
        row = 5
        if original is not None:
            check = compare_reconstruction(original, decomposition)
            ws.write(row, 0, "Max |PA - LU|", formats["header"])
            ws.write(row, 1, check.max_abs, formats["sci"])
            row += 1
        row += 1

        row = self._write_table(ws, row, "Matrix L", lower_frame(decomposition), formats, index=True)
        row = self._write_table(ws, row, "Matrix U", upper_frame(decomposition), formats, index=True)
        self._write_table(ws, row, "Permutation", permutation_frame(decomposition), formats, index=False)

    def generate(self) -> bytes:
        """Build the workbook and return it as bytes."""
        output = io.BytesIO()
        workbook = xlsxwriter.Workbook(output, {'in_memory': True})
        formats = self._create_formats(workbook)

        used: set = set()
        for label, decomposition, original in self.entries:
            name = self._sheet_name(label, used)
            self._write_decomposition(workbook, formats, name, label, decomposition, original)

        workbook.close()
        output.seek(0)
        return output.getvalue()

    def save(self, output_path: Union[str, Path]) -> Path:
        """Write the workbook to ``output_path``, creating parent directories."""
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.generate())
        return path


__all__ = ["LUExcelExporter"]
