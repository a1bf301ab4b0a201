"""WSGI entry point: `flask --app app run` or `gunicorn app:app`."""
from sunday_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config.get("DEBUG", False))
