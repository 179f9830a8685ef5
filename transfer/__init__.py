# SchoolDesk import/export
from .csv_text import camel, read_csv, parse_csv, to_csv
from .importer import (
    RECOGNIZED_KEYS,
    KIND_RULES,
    parse_json,
    build_snapshot,
    validate_and_load,
    infer_kind,
    tabular_import,
    import_file,
)
from .exporter import (
    CURRENT_EXPORT_FILENAME,
    export_filename,
    backup_filename,
    export_state,
    list_csv,
    report_csv,
)

__all__ = [
    "camel",
    "read_csv",
    "parse_csv",
    "to_csv",
    "RECOGNIZED_KEYS",
    "KIND_RULES",
    "parse_json",
    "build_snapshot",
    "validate_and_load",
    "infer_kind",
    "tabular_import",
    "import_file",
    "CURRENT_EXPORT_FILENAME",
    "export_filename",
    "backup_filename",
    "export_state",
    "list_csv",
    "report_csv",
]
