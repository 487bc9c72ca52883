import pytest
from fastapi.testclient import TestClient

from patent_search.db.database import Database
from patent_search.db.session_manager import db_session
from patent_search.main import create_app
from patent_search.scripts.seed import seed_patents

IRRIGATION_ABSTRACT = (
    "A method for watering plants using soil sensors and automated irrigation control"
)


def _patent(id, title, abstract, inventors, publication_date, score, **extra):
    record = {
        "id": id,
        "title": title,
        "abstract": abstract,
        "inventors": inventors,
        "publicationDate": publication_date,
        "relevanceScore": score,
    }
    record.update(extra)
    return record


def make_corpus():
    """Seven hand-written patents plus eighteen fillers: 25 in total."""
    corpus = [
        _patent("US-0001", "Smart Irrigation Controller", IRRIGATION_ABSTRACT,
                ["Maria Lopez", "James Chen"], "2019-03-12", 0.9,
                assignee="GreenGrow Inc.", status="Active", cpcCodes=["A01G25/16"],
                claims=["A method of irrigating plants."]),
        _patent("US-0002", "Wireless Soil Probe",
                "Soil sensors enable automated irrigation in greenhouses.",
                ["Priya Natarajan"], "2020-07-01", 0.8, status="Active"),
        _patent("US-0003", "Hydroponic Tower",
                "Hydroponic towers grow plants indoors.",
                ["James Chen", "Olga Petrova"], "2021-01-15", 0.7, status="Pending"),
        _patent("US-0004", "Lawn Sprinkler Timer",
                "Automated irrigation control for lawns.",
                ["Ahmed Khan"], "2018-11-20", 0.6, status="Expired"),
        _patent("US-0005", "Battery Cooling Plate",
                "Battery cooling plate for electric vehicles.",
                ["Kenji Watanabe"], "2022-05-30", 0.5),
        _patent("US-0006", "Orchard Irrigation",
                "Automated irrigation of orchards.",
                ["Lucia Rossi"], "2023-09-05", 0.4),
        _patent("US-0007", "Moisture Valve",
                "Soil moisture sensors, watering valves.",
                ["Maria Lopez"], "2017-02-28", 0.3),
    ]
    for n in range(18):
        corpus.append(_patent(
            f"US-1{n:03d}", f"Modular Gadget {n}",
            f"Gadget assembly variant {n} with modular housing.",
            ["Filler Inventor"], f"2010-01-{n + 1:02d}", 0.05,
        ))
    return corpus


@pytest.fixture
def corpus():
    return make_corpus()


@pytest.fixture
def database():
    db = Database(url="sqlite://")
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def seeded_database(database, corpus):
    with db_session(database) as session:
        seed_patents(session, corpus)
    return database


@pytest.fixture
def session(seeded_database):
    s = seeded_database.session()
    yield s
    s.close()


@pytest.fixture
def client(seeded_database):
    app = create_app(database=seeded_database)
    with TestClient(app) as c:
        yield c
