from reel.evaluation.evaluator import calc, is_truthy

__all__ = ["calc", "is_truthy"]
