"""Наборы китайских текстов для тестирования.

Содержит простое предложение, текст со смесью латиницы и текст
с повторяющимися словами для проверки извлечения ключевых слов.
"""

SAMPLE_SIMPLE_TEXT = "我来到北京清华大学"


SAMPLE_MIXED_TEXT = "他来到了网易杭研大厦 Python3"


SAMPLE_KEYWORD_TEXT = """
我来到北京清华大学，清华大学在北京。北京的大学很多，清华大学是其中之一。
""".strip()
