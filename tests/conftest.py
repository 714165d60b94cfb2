from datetime import datetime, timedelta, timezone

import pytest

IST = timezone(timedelta(hours=5, minutes=30))

SAMPLE = """\
Panchangam for Portland, OR (all times PST)
Date and time created : 2025/12/01 15:15:42

Samvatsaram : Vishwaavasu
Ayanam : Dakshinayanam
Ruthu : Hemantha
Masam : Karthika
Paksham : Krishna

Thithi details:
Pournami: 2025/12/03 18:04 to 2025/12/04 15:14
Prathama: 2025/12/04 15:14 to 2025/12/05 11:26
Dwitiya: 2025/12/05 11:26 to 2025/12/06 07:40
Next Thithi: 2025/12/05 11:26 to 2025/12/06 07:40

Nakshatram details:
Krittika: 2025/12/03 22:10 to 2025/12/04 21:05
Rohini: 2025/12/04 21:05 to 2025/12/05 19:44
Mrigasira: 2025/12/05 19:44 to 2025/12/06 18:02

Yogam details:
Siddha: 2025/12/04 02:30 to 2025/12/04 23:50
Sadhya: 2025/12/04 23:50 to 2025/12/05 20:01

Karanam details:
Vanija: 2025/12/04 15:14 to 2025/12/05 01:18
Vishti: 2025/12/05 01:18 to 2025/12/05 11:26
this line is not an interval
Bava: 2025/12/05 11:26 to 2025/12/05 21:30
"""


@pytest.fixture
def sample_text():
    return SAMPLE


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "panchangam.txt"
    path.write_text(SAMPLE, encoding="utf8")
    return path


@pytest.fixture
def noon_ist():
    return datetime(2025, 12, 5, 12, 0, tzinfo=IST)
