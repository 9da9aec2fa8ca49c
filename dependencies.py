from fastapi import Request

from generator import ReportGenerator
from store import Store


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_generator(request: Request) -> ReportGenerator:
    return request.app.state.generator
