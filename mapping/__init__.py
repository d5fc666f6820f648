"""
Sheet-to-record mapping engine.

  1. cell_value    resolve raw cells to strings, extract column letters
  2. columns       header row -> ColumnMap
  3. row_binder    data row -> record (or None for a blank row)
  4. orchestrator  ExcelRecordParser.parse()

Submodules are imported directly; nothing is re-exported here.
"""
