import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_quizreport.db")
