from .writer import CSVReportWriter, FileReport, JSONReportWriter, build_report

__all__ = ['CSVReportWriter', 'FileReport', 'JSONReportWriter', 'build_report']
