# vehicle_tracker/wsgi.py
# gunicorn "vehicle_tracker.wsgi:app"
from vehicle_tracker.main import create_app

app = create_app()
