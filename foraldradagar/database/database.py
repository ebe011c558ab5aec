# foraldradagar/database/database.py
"""
SQLAlchemy database setup and models.

Raderna översätts till frysta ögonblicksbilder (foraldradagar.core.models)
med family_to_snapshot och tillbaka med family_from_snapshot. Beräkningarna
arbetar aldrig direkt mot databasraderna.
"""

import os
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import relationship, sessionmaker

from foraldradagar.core.models import (
    Child,
    ChildcarePlan,
    Family,
    KnowledgeLevel,
    LeaveBlock,
    LeaveDayRecord,
    LeaveType,
    Multiplicity,
    Parent,
    ParentRole,
    PayLevel,
    PlanningPriority,
    Scenario,
)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./foraldradagar/database/foraldradagar.db")

_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class FamilyRow(Base):
    """En familj med föräldrar, barn och upp till tre planer."""

    __tablename__ = "families"

    id = Column(Integer, primary_key=True, index=True)
    planning_priority = Column(SQLEnum(PlanningPriority), nullable=True)
    childcare_plan = Column(SQLEnum(ChildcarePlan), nullable=True)
    knowledge_level = Column(SQLEnum(KnowledgeLevel), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    parents = relationship("ParentRow", back_populates="family", cascade="all, delete-orphan")
    children = relationship("ChildRow", back_populates="family", cascade="all, delete-orphan")
    scenarios = relationship(
        "ScenarioRow", back_populates="family", cascade="all, delete-orphan", order_by="ScenarioRow.id"
    )

    def __repr__(self):
        return f"<FamilyRow(id={self.id}, parents={len(self.parents)}, scenarios={len(self.scenarios)})>"


class ParentRow(Base):
    __tablename__ = "parents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, default="")
    role = Column(SQLEnum(ParentRole), nullable=False)
    monthly_gross_income = Column(Numeric(12, 2), nullable=False, default=0)
    employer_top_up_percentage = Column(Integer, nullable=True)  # 0-100
    employer_top_up_months = Column(Integer, nullable=True)

    # Relationships
    family = relationship("FamilyRow", back_populates="parents")
    leave_days = relationship(
        "LeaveDayRow", back_populates="parent", cascade="all, delete-orphan", order_by="LeaveDayRow.date"
    )

    def __repr__(self):
        return f"<ParentRow(id={self.id}, family_id={self.family_id}, role={self.role})>"


class ChildRow(Base):
    __tablename__ = "children"

    id = Column(Integer, primary_key=True, autoincrement=True)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False, index=True)
    name = Column(String(100), nullable=True)
    birth_date = Column(Date, nullable=False)  # Födelsedatum eller beräknat datum
    is_born = Column(Boolean, nullable=False, default=False)
    multiplicity = Column(SQLEnum(Multiplicity), nullable=False, default=Multiplicity.SINGLE)
    is_first_child = Column(Boolean, nullable=False, default=True)

    # Relationships
    family = relationship("FamilyRow", back_populates="children")


class LeaveDayRow(Base):
    """Loggad eller planerad ledighetsdag."""

    __tablename__ = "leave_days"

    id = Column(Integer, primary_key=True, autoincrement=True)
    parent_id = Column(Integer, ForeignKey("parents.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    leave_type = Column(SQLEnum(LeaveType), nullable=False, default=LeaveType.PARENTAL_LEAVE)
    pay_level = Column(SQLEnum(PayLevel), nullable=False, default=PayLevel.SGI_LEVEL)
    is_planned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    parent = relationship("ParentRow", back_populates="leave_days")

    def __repr__(self):
        return f"<LeaveDayRow(id={self.id}, parent_id={self.parent_id}, date={self.date}, type={self.leave_type})>"


class ScenarioRow(Base):
    __tablename__ = "scenarios"

    id = Column(Integer, primary_key=True, autoincrement=True)
    family_id = Column(Integer, ForeignKey("families.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, default="Plan 1")
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    family = relationship("FamilyRow", back_populates="scenarios")
    blocks = relationship(
        "LeaveBlockRow", back_populates="scenario", cascade="all, delete-orphan", order_by="LeaveBlockRow.start_date"
    )


class LeaveBlockRow(Base):
    __tablename__ = "leave_blocks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    scenario_id = Column(Integer, ForeignKey("scenarios.id"), nullable=False, index=True)
    role = Column(SQLEnum(ParentRole), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)  # Exklusivt
    pay_level = Column(SQLEnum(PayLevel), nullable=False, default=PayLevel.SGI_LEVEL)
    fraction = Column(Numeric(4, 3), nullable=False, default=1)

    # Relationships
    scenario = relationship("ScenarioRow", back_populates="blocks")


# ==========================
# Adaptrar rad <-> ögonblicksbild
# ==========================


def _decimal(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal(0)


def leave_day_to_snapshot(row: LeaveDayRow) -> LeaveDayRecord:
    return LeaveDayRecord(
        id=row.id,
        date=row.date,
        leave_type=LeaveType(row.leave_type),
        pay_level=PayLevel(row.pay_level),
        is_planned=bool(row.is_planned),
    )


def scenario_to_snapshot(row: ScenarioRow) -> Scenario:
    return Scenario(
        id=row.id,
        name=row.name,
        blocks=tuple(
            LeaveBlock(
                id=block.id,
                start_date=block.start_date,
                end_date=block.end_date,
                role=ParentRole(block.role),
                pay_level=PayLevel(block.pay_level),
                # Numeric kan komma tillbaka som "0.500"; normalisera till nivåns representation
                fraction=_decimal(block.fraction).normalize(),
            )
            for block in row.blocks
        ),
    )


def family_to_snapshot(row: FamilyRow) -> Family:
    """Bygger en fryst Family av databasraderna."""
    parents = tuple(
        Parent(
            id=p.id,
            name=p.name or "",
            monthly_gross_income=_decimal(p.monthly_gross_income),
            employer_top_up_percentage=p.employer_top_up_percentage,
            employer_top_up_months=p.employer_top_up_months,
            role=ParentRole(p.role),
            leave_days=tuple(leave_day_to_snapshot(d) for d in p.leave_days),
        )
        for p in sorted(row.parents, key=lambda p: ParentRole(p.role).value)
    )
    children = tuple(
        Child(
            id=c.id,
            name=c.name,
            birth_date=c.birth_date,
            is_born=bool(c.is_born),
            multiplicity=Multiplicity(c.multiplicity),
            is_first_child=bool(c.is_first_child),
        )
        for c in row.children
    )
    return Family(
        id=row.id,
        parents=parents,
        children=children,
        scenarios=tuple(scenario_to_snapshot(s) for s in row.scenarios),
        planning_priority=PlanningPriority(row.planning_priority) if row.planning_priority else None,
        childcare_plan=ChildcarePlan(row.childcare_plan) if row.childcare_plan else None,
        knowledge_level=KnowledgeLevel(row.knowledge_level) if row.knowledge_level else None,
    )


def block_row_from_snapshot(block: LeaveBlock) -> LeaveBlockRow:
    return LeaveBlockRow(
        role=block.role,
        start_date=block.start_date,
        end_date=block.end_date,
        pay_level=block.pay_level,
        fraction=block.fraction,
    )


def scenario_row_from_snapshot(scenario: Scenario) -> ScenarioRow:
    return ScenarioRow(name=scenario.name, blocks=[block_row_from_snapshot(b) for b in scenario.blocks])


def family_from_snapshot(family: Family) -> FamilyRow:
    """Bygger nya (ej sparade) rader av en Family. Id:n sätts av databasen."""
    return FamilyRow(
        planning_priority=family.planning_priority,
        childcare_plan=family.childcare_plan,
        knowledge_level=family.knowledge_level,
        parents=[
            ParentRow(
                name=p.name,
                role=p.role,
                monthly_gross_income=p.monthly_gross_income,
                employer_top_up_percentage=p.employer_top_up_percentage,
                employer_top_up_months=p.employer_top_up_months,
                leave_days=[
                    LeaveDayRow(
                        date=d.date,
                        leave_type=d.leave_type,
                        pay_level=d.pay_level,
                        is_planned=d.is_planned,
                    )
                    for d in p.leave_days
                ],
            )
            for p in family.parents
        ],
        children=[
            ChildRow(
                name=c.name,
                birth_date=c.birth_date,
                is_born=c.is_born,
                multiplicity=c.multiplicity,
                is_first_child=c.is_first_child,
            )
            for c in family.children
        ],
        scenarios=[scenario_row_from_snapshot(s) for s in family.scenarios],
    )


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
