# The default lease reference is added after legal_documents exists, since
# legal documents in turn point back at the landlord.

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('properties', '0001_initial'),
        ('legal_documents', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='property',
            name='default_lease_document',
            field=models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='default_for_properties', to='legal_documents.legaldocument'),
        ),
    ]
