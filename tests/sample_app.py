# ================================
# SAMPLE MODELS & RESOURCES (tests/sample_app.py)
# ================================

from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, String, Uuid
from sqlalchemy.orm import joinedload, relationship

from resource_admin.models.base import Base, SoftDeleteMixin
from resource_admin.resources import (
    ArchiveAction,
    BadgeColumn,
    BooleanColumn,
    BulkAction,
    CustomFilter,
    DateColumn,
    MoneyColumn,
    NumberField,
    NumberFilter,
    PresetView,
    Resource,
    SelectField,
    SelectFilter,
    TextColumn,
    TextField,
    TrashedFilter,
)

# ================================
# MODELS
# ================================

class Author(Base):
    name = Column(String(200), nullable=False)

    posts = relationship("Post", back_populates="author")


class Post(SoftDeleteMixin, Base):
    title = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, default="draft")
    category = Column(String(50), nullable=True)
    amount = Column(Float, nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)
    author_id = Column(Uuid(as_uuid=True), ForeignKey("authors.id"), nullable=True)

    author = relationship("Author", back_populates="posts")

# ================================
# PRESET CALLBACKS
# ================================

def only_published(query, request):
    return query.filter(Post.status == "published")


def only_drafts(query, request):
    return query.filter(Post.status == "draft")


def only_archived(query, request):
    return query.filter(Post.status == "archived")

# ================================
# RESOURCES
# ================================

class PostResource(Resource):
    model = Post
    navigation_group = "Content"
    navigation_icon = "heroicon-o-document-text"
    navigation_sort = 1

    @classmethod
    def table(cls):
        return {
            "columns": [
                TextColumn.make("title", "Title").sortable().searchable(),
                BadgeColumn.make("status", "Status").colors({"published": "green", "draft": "gray"}),
                TextColumn.make("category", "Category"),
                MoneyColumn.make("amount", "Amount"),
                BooleanColumn.make("is_featured", "Featured"),
                DateColumn.make("published_at", "Published").date_time(),
                TextColumn.make("author.name", "Author"),
            ],
            "filters": [
                SelectFilter.make("category", "Category").options({"news": "News", "tech": "Tech"}),
                NumberFilter.make("min_amount", "Minimum amount").query(
                    lambda query, value: query.filter(Post.amount >= float(value))
                ),
                TrashedFilter.make(),
            ],
            "custom_filters": [
                CustomFilter.make("amount_range", "Amount Range")
                .component("AmountRangeFilter")
                .outputs([
                    {"name": "amount_from", "default": None},
                    {"name": "amount_to", "default": None},
                ]),
            ],
            "preset_views": {
                "published": {"label": "Published", "query": only_published, "group": "status"},
                "drafts": PresetView.make("drafts").query(only_drafts).in_group("status"),
                "archived": {"query": only_archived},
                "everything": {"label": "Everything"},
            },
            "actions": [ArchiveAction.make()],
            "bulk_actions": [BulkAction.make("delete", "Delete").requires_confirmation()],
        }

    @classmethod
    def form(cls):
        return [
            TextField.make("title", "Title").required().rules(["string", "max:255"]),
            SelectField.make("status", "Status")
            .options(["draft", "published", "archived"])
            .required()
            .rules(["in:draft,published,archived"]),
            TextField.make("category", "Category"),
            NumberField.make("amount", "Amount").rules(["numeric", "min:0"]),
            TextField.make("archive_reason", "Archive reason")
            .show_when("status", "=", "archived")
            .required(),
        ]

    @classmethod
    def get_eager_loads(cls):
        return [joinedload(Post.author)]

    @classmethod
    def get_unsortable_columns(cls):
        return ["author.name"]


class AuthorResource(Resource):
    model = Author
    navigation_group = "People"
    navigation_sort = 5

    @classmethod
    def table(cls):
        return {"columns": [TextColumn.make("name", "Name").sortable()]}

    @classmethod
    def form(cls):
        return [TextField.make("name", "Name").required()]
