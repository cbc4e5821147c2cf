import os

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///calculator.db").replace("postgres://", "postgresql://", 1)
SQLALCHEMY_DATABASE_URI = DATABASE_URL

SECRET_KEY = os.getenv("SECRET_KEY")

# Seconds an error ("Cannot divide by zero!") stays up before the calculator clears
CALCULATOR_ERROR_RESET_SECONDS = float(os.getenv("CALCULATOR_ERROR_RESET_SECONDS", "2"))

# Jinja2 whitespace control - prevents unwanted line breaks in rendered HTML
JINJA2_TRIM_BLOCKS = True
JINJA2_LSTRIP_BLOCKS = True
