from .stats import ProgressSummary, correct_questions, format_exam_result, format_summary, review_questions, summarize

__all__ = [
    "ProgressSummary",
    "summarize",
    "format_summary",
    "format_exam_result",
    "correct_questions",
    "review_questions",
]
