"""parish registry baseline

Revision ID: 5a1c0e7d2b90
Revises:
Create Date: 2024-05-02 09:00:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "5a1c0e7d2b90"
down_revision = None
branch_labels = None
depends_on = None

PRIEST_TYPES = ("DIOCESAN", "RELIGIOUS", "EXTERN", "RETIRED", "BISHOP", "DEACON", "SEMINARIAN")
EVENT_TYPES = ("MASS", "FEAST", "RETREAT", "MEETING", "PILGRIMAGE", "CELEBRATION", "OTHER")
EVENT_CATEGORIES = ("GENERAL", "MASS")
MASS_TYPES = ("SUNDAY", "WEEKDAY", "SOLEMNITY", "FEAST", "MEMORIAL", "FUNERAL", "WEDDING", "SPECIAL")
SEASONS = ("ADVENT", "CHRISTMAS", "ORDINARY_TIME", "LENT", "EASTER_TRIDUUM", "EASTER")
INTENTION_TYPES = (
    "DECEASED", "SICK", "THANKSGIVING", "SPECIAL_NEED",
    "ANNIVERSARY", "BIRTHDAY", "PATRON_SAINT", "OTHER",
)


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    # --- faithful registry --------------------------------------------------
    op.create_table(
        "faithfuls",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("firstname", sa.String(length=100), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("father_name", sa.String(length=100), nullable=True),
        sa.Column("mother_name", sa.String(length=100), nullable=True),
        sa.Column("godparent_name", sa.String(length=100), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("date_of_baptism", sa.Date(), nullable=True),
        sa.Column("baptism_id", sa.String(length=50), nullable=True),
        sa.Column("baptism_minister", sa.String(length=100), nullable=True),
        sa.Column("date_of_first_communion", sa.Date(), nullable=True),
        sa.Column("date_of_confirmation", sa.Date(), nullable=True),
        sa.Column("confirmation_id", sa.String(length=50), nullable=True),
        sa.Column("date_of_matrimony", sa.Date(), nullable=True),
        sa.Column("matrimony_id", sa.String(length=50), nullable=True),
        sa.Column("spouse_name", sa.String(length=100), nullable=True),
        sa.Column("spouse_baptism_id", sa.String(length=50), nullable=True),
        sa.Column("diaconate", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("diaconate_date", sa.Date(), nullable=True),
        sa.Column("priesthood", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("priesthood_date", sa.Date(), nullable=True),
        sa.Column("episcopate", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("episcopate_date", sa.Date(), nullable=True),
        sa.Column("congregation_name", sa.String(length=100), nullable=True),
        sa.Column("temporal_profession", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("temporal_profession_date", sa.Date(), nullable=True),
        sa.Column("permanent_profession", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("permanent_profession_date", sa.Date(), nullable=True),
        sa.Column("other_ministry_details", sa.String(length=255), nullable=True),
        sa.Column("has_relocated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("new_parish_name", sa.String(length=100), nullable=True),
        sa.Column("is_deceased", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("date_of_death", sa.Date(), nullable=True),
        sa.Column("diocese", sa.String(length=50), nullable=True),
        sa.Column("parish", sa.String(length=100), nullable=True),
        sa.Column("subparish", sa.String(length=100), nullable=True),
        sa.Column("basic_ecclesial_community", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("baptism_id"),
        sa.UniqueConstraint("confirmation_id"),
        sa.UniqueConstraint("matrimony_id"),
    )
    op.create_index("ix_faithfuls_id", "faithfuls", ["id"])
    op.create_index("ix_faithfuls_name", "faithfuls", ["name"])
    op.create_index("ix_faithfuls_parish", "faithfuls", ["parish"])
    op.create_index("ix_faithfuls_subparish", "faithfuls", ["subparish"])

    op.create_table(
        "ministries",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("ministry_type", sa.String(length=50), nullable=False),
        sa.Column("faithful_id", sa.Integer(), sa.ForeignKey("faithfuls.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_ministries_id", "ministries", ["id"])
    op.create_index("ix_ministries_faithful_id", "ministries", ["faithful_id"])

    op.create_table(
        "lapse_events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("lapse_type", sa.String(length=50), nullable=False),
        sa.Column("lapse_date", sa.Date(), nullable=True),
        sa.Column("lapse_reason", sa.String(length=500), nullable=True),
        sa.Column("return_date", sa.Date(), nullable=True),
        sa.Column("faithful_id", sa.Integer(), sa.ForeignKey("faithfuls.id"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_lapse_events_id", "lapse_events", ["id"])
    op.create_index("ix_lapse_events_faithful_id", "lapse_events", ["faithful_id"])

    # --- clergy ---------------------------------------------------------------
    op.create_table(
        "priests",
        sa.Column("id", sa.Integer(), autoincrement=False, nullable=False),
        sa.Column("names", sa.String(length=150), nullable=False),
        sa.Column("priest_type", sa.Enum(*PRIEST_TYPES, name="priest_type"), nullable=False),
        sa.Column("ordination_date", sa.Date(), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("parish_of_origin", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("profile_picture_url", sa.String(length=255), nullable=True),
        sa.Column("is_assigned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_priests_priest_type", "priests", ["priest_type"])

    # --- events & masses ------------------------------------------------------
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=100), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("event_date", sa.Date(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("event_type", sa.Enum(*EVENT_TYPES, name="event_type"), nullable=True),
        sa.Column("category", sa.Enum(*EVENT_CATEGORIES, name="event_category"), nullable=False),
        sa.Column("image_url", sa.String(length=255), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_events_id", "events", ["id"])
    op.create_index("ix_events_event_date", "events", ["event_date"])

    op.create_table(
        "masses",
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("mass_type", sa.Enum(*MASS_TYPES, name="mass_type"), nullable=False),
        sa.Column("liturgical_season", sa.Enum(*SEASONS, name="liturgical_season"), nullable=True),
        sa.Column("readings", sa.Text(), nullable=True),
        sa.Column("main_celebrant_id", sa.Integer(), sa.ForeignKey("priests.id"), nullable=False),
        sa.PrimaryKeyConstraint("event_id"),
    )
    op.create_index("ix_masses_mass_type", "masses", ["mass_type"])
    op.create_index("ix_masses_main_celebrant_id", "masses", ["main_celebrant_id"])

    op.create_table(
        "mass_concelebrants",
        sa.Column("mass_id", sa.Integer(), sa.ForeignKey("masses.event_id"), nullable=False),
        sa.Column("priest_id", sa.Integer(), sa.ForeignKey("priests.id"), nullable=False),
        sa.PrimaryKeyConstraint("mass_id", "priest_id"),
    )

    # --- intentions -----------------------------------------------------------
    op.create_table(
        "intentions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("intention_type", sa.Enum(*INTENTION_TYPES, name="intention_type"), nullable=False),
        sa.Column("intention_text", sa.String(length=1000), nullable=False),
        sa.Column("requested_date", sa.Date(), nullable=False),
        sa.Column("is_paid", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("offering_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("mass_id", sa.Integer(), sa.ForeignKey("masses.event_id"), nullable=True),
        sa.Column("faithful_id", sa.Integer(), sa.ForeignKey("faithfuls.id"), nullable=True),
        sa.Column("external_faithful_name", sa.String(length=150), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_intentions_id", "intentions", ["id"])
    op.create_index("ix_intentions_intention_type", "intentions", ["intention_type"])
    op.create_index("ix_intentions_requested_date", "intentions", ["requested_date"])
    op.create_index("ix_intentions_mass_id", "intentions", ["mass_id"])
    op.create_index("ix_intentions_faithful_id", "intentions", ["faithful_id"])

    # --- donations ------------------------------------------------------------
    op.create_table(
        "donations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("faithful_id", sa.Integer(), sa.ForeignKey("faithfuls.id"), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("contribution_type", sa.String(length=50), nullable=True),
        sa.Column("payment_method", sa.String(length=50), nullable=True),
        sa.Column("reference_number", sa.String(length=100), nullable=True),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("recorded_by", sa.String(length=100), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("amount > 0", name="ck_donations_amount_positive"),
        sa.CheckConstraint("year BETWEEN 1900 AND 2100", name="ck_donations_year_range"),
    )
    op.create_index("ix_donations_id", "donations", ["id"])
    op.create_index("ix_donations_faithful_id", "donations", ["faithful_id"])
    op.create_index("ix_donations_year", "donations", ["year"])


def downgrade() -> None:
    op.drop_table("donations")
    op.drop_table("intentions")
    op.drop_table("mass_concelebrants")
    op.drop_table("masses")
    op.drop_table("events")
    op.drop_table("priests")
    op.drop_table("lapse_events")
    op.drop_table("ministries")
    op.drop_table("faithfuls")

    bind = op.get_bind()
    for name in ("intention_type", "liturgical_season", "mass_type", "event_category", "event_type", "priest_type"):
        sa.Enum(name=name).drop(bind, checkfirst=True)
