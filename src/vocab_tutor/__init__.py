"""Study-session generation for vocabulary tables."""
from vocab_tutor.questions import create_question
from vocab_tutor.scoring import priority_score, success_rate
from vocab_tutor.scramble import generate_scramble_session
from vocab_tutor.selection import select_rows
from vocab_tutor.session import generate_study_session, regenerate_question_for_row

__version__ = "0.1.0"
