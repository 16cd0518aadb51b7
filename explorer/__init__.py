# Commonly used entry points, available at package level
from .config import Settings, get_settings, setup_logger
from .upload import UploadError, load_upload, robust_read_csv, validate_upload
from .profiler import analyze_data, classify_column, profile_column
from .insights import (
    ask_about_data,
    generate_data_insights,
    get_demo_insights,
    parse_ai_response,
)
from .charts import build_figure, choose_chart_type
from .auth import AuthError, sign_in, sign_out, sign_up
