from datetime import date, datetime


# Single source of "now" for the engine; tests monkeypatch these.
def today() -> date:
    return date.today()


def now() -> datetime:
    return datetime.now()
