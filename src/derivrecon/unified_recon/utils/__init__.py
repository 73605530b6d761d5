from .dataframe_output import create_summary_dataframe, summary_to_records, save_summary_to_json

__all__ = ["create_summary_dataframe", "summary_to_records", "save_summary_to_json"]
