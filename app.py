import importlib

from config import get_settings_module

from src.operator_tracking.operator_tracking.core.constants import DEFAULT_API_PORT
from src.operator_tracking.operator_tracking.main import create_app

app = create_app()

if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    app.run(
        host="0.0.0.0",
        port=int(getattr(settings, "API_PORT", DEFAULT_API_PORT)),
        debug=bool(getattr(settings, "DEBUG", False)),
    )
