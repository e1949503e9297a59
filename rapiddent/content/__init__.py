from .document import Document
from .question import QuestionOption, QuestionRecord, option_id_for, parse_question, parse_questions
from .scenario import ScenarioRecord, parse_scenario, parse_scenarios

__all__ = [
    "Document",
    "QuestionOption",
    "QuestionRecord",
    "option_id_for",
    "parse_question",
    "parse_questions",
    "ScenarioRecord",
    "parse_scenario",
    "parse_scenarios",
]
