import django.core.serializers.json
import uuid6
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoredDocument",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("collection", models.CharField(max_length=100)),
                ("document_id", models.CharField(max_length=255)),
                (
                    "data",
                    models.JSONField(
                        default=dict,
                        encoder=django.core.serializers.json.DjangoJSONEncoder,
                    ),
                ),
            ],
            options={
                "db_table": "stored_documents",
                "ordering": ["collection", "created_at"],
                "indexes": [
                    models.Index(
                        fields=["collection"], name="stored_documents_coll_idx"
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("collection", "document_id"),
                        name="stored_documents_collection_doc_uniq",
                    )
                ],
            },
        ),
    ]
