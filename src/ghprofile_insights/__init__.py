"""GitHub 프로필 스냅샷 분석 (페르소나, 배지, 타임라인, 배틀 점수)."""

__version__ = "0.1.0"
