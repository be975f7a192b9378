"""Demo data used to seed every new session."""

from portal.session.state import (
    ClinicOffer,
    DomainRecords,
    IncomingPlan,
    Lead,
    PlanStatus,
    Procedure,
    Scan,
    SessionState,
    TreatmentPlan,
)


def build_default_records() -> DomainRecords:
    """Build a fresh bundle of demo records.

    Every call returns new objects so sessions never share mutable records.
    """
    return DomainRecords(
        scans=[
            Scan(id=1, date="2025-11-15", status="ready", ai_processed=True),
            Scan(id=2, date="2025-12-05", status="processing", ai_processed=False),
        ],
        treatment_plan=TreatmentPlan(
            diagnoses=[
                "Кариес зуба 1.6",
                "Пульпит зуба 2.5",
                "Отсутствует зуб 3.7",
            ],
            procedures=[
                Procedure(type="Имплант", position="3.7", urgency="Средняя"),
                Procedure(type="Коронка", position="2.5", urgency="Высокая"),
                Procedure(type="Пломбирование", position="1.6", urgency="Высокая"),
            ],
        ),
        offers=[
            ClinicOffer(
                clinic="СтомаПрофи",
                rating=4.8,
                cost=185000,
                duration="3-4 месяца",
                warranty="5 лет на имплант",
                installment="До 12 месяцев",
                details=(
                    "Имплант Nobel - 95000₽, Коронка - 35000₽, "
                    "Лечение каналов - 15000₽, Прочее - 40000₽"
                ),
            ),
            ClinicOffer(
                clinic="Дентал Плюс",
                rating=4.5,
                cost=165000,
                duration="2-3 месяца",
                warranty="3 года на имплант",
                installment="До 6 месяцев",
                details=(
                    "Имплант Osstem - 75000₽, Коронка - 30000₽, "
                    "Лечение каналов - 12000₽, Прочее - 48000₽"
                ),
            ),
            ClinicOffer(
                clinic="ЭлитДент",
                rating=4.9,
                cost=225000,
                duration="3-5 месяцев",
                warranty="10 лет на имплант",
                installment="До 24 месяцев",
                details=(
                    "Имплант Straumann - 120000₽, Коронка - 45000₽, "
                    "Лечение каналов - 20000₽, Прочее - 40000₽"
                ),
            ),
        ],
        incoming_plans=[
            IncomingPlan(
                id=1,
                age=35,
                gender="Ж",
                date="2025-12-08",
                procedures="Имплант 3.7, Коронка 2.5, Пломбирование 1.6",
                status=PlanStatus.NEW,
            ),
            IncomingPlan(
                id=2,
                age=42,
                gender="М",
                date="2025-12-07",
                procedures="Протезирование верхняя челюсть",
                status=PlanStatus.OFFER_SENT,
            ),
            IncomingPlan(
                id=3,
                age=28,
                gender="Ж",
                date="2025-12-09",
                procedures="Кариес множественный, 4 пломбы",
                status=PlanStatus.NEW,
            ),
            IncomingPlan(
                id=4,
                age=51,
                gender="М",
                date="2025-12-10",
                procedures="Имплант 4.6, Синус-лифтинг",
                status=PlanStatus.NEW,
            ),
            IncomingPlan(
                id=5,
                age=63,
                gender="Ж",
                date="2025-11-20",
                procedures="Съёмный протез нижняя челюсть",
                status=PlanStatus.EXPIRED,
            ),
        ],
        leads=[
            Lead(
                id=1,
                name="Анна Петрова",
                phone="+7 916 555-1234",
                plan="Имплант 3.7, Коронка 2.5",
                cost=165000,
                status="Не обработан",
            ),
            Lead(
                id=2,
                name="Игорь Смирнов",
                phone="+7 926 555-5678",
                plan="Протезирование",
                cost=280000,
                status="Записан на консультацию",
            ),
        ],
    )


def build_default_state() -> SessionState:
    """Build a new anonymous session seeded with demo records."""
    return SessionState(records=build_default_records())
