"""Sleep Diary - multi-user sleep journal API"""

__version__ = "0.1.0"
