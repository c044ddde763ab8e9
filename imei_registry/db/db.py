from sqlmodel import Session, create_engine

from imei_registry.utils import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    # sync endpoints run in a threadpool
    connect_args["check_same_thread"] = False

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)


def get_session():
    with Session(engine) as session:
        yield session
