"""
설정 패키지

base.yaml + environments/<env>.yaml 설정 파일과 Pydantic 스키마를 제공합니다.
"""
