from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import legal_documents.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LegalDocument',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('type', models.CharField(choices=[('lease', 'Lease Agreement'), ('addendum', 'Lease Addendum'), ('disclosure', 'Disclosure Form'), ('notice', 'Notice'), ('move_in', 'Move-In Checklist'), ('move_out', 'Move-Out Checklist'), ('rules', 'Rules & Regulations'), ('pet_agreement', 'Pet Agreement'), ('other', 'Other')], default='lease', max_length=20)),
                ('category', models.CharField(blank=True, max_length=100, null=True)),
                ('state', models.CharField(blank=True, help_text="Jurisdiction the document was written for (e.g. 'CA')", max_length=50, null=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('file', models.FileField(upload_to=legal_documents.models.legal_document_upload_path)),
                ('file_type', models.CharField(blank=True, max_length=255)),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True)),
                ('page_count', models.PositiveIntegerField(blank=True, help_text='Known for PDFs only', null=True, validators=[django.core.validators.MinValueValidator(1)])),
                ('is_template', models.BooleanField(default=True)),
                ('is_active', models.BooleanField(default=True)),
                ('fields_configured', models.BooleanField(default=False)),
                ('fields_saved_at', models.DateTimeField(blank=True, null=True)),
                ('revision', models.PositiveIntegerField(default=1, help_text='Incremented on every field list write (optimistic concurrency)')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('landlord', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='legal_documents', to='properties.landlord')),
            ],
            options={
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['landlord', 'type'], name='legal_doc_landlord_type_idx')],
            },
        ),
        migrations.CreateModel(
            name='SignatureField',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('key', models.CharField(help_text='Client-side identifier of the field', max_length=100)),
                ('position', models.PositiveIntegerField(help_text="Order within the document's field list")),
                ('field_type', models.CharField(choices=[('signature', 'Signature'), ('initial', 'Initial'), ('date', 'Date'), ('text', 'Text'), ('name', 'Full Name')], max_length=20)),
                ('role', models.CharField(choices=[('tenant', 'Tenant'), ('landlord', 'Landlord')], max_length=20)),
                ('label', models.CharField(blank=True, max_length=255)),
                ('required', models.BooleanField(default=True)),
                ('page_number', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1)])),
                ('x_pct', models.FloatField(help_text='X position as percentage of page width', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(1.0)])),
                ('y_pct', models.FloatField(help_text='Y position as percentage of page height', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(1.0)])),
                ('width_pct', models.FloatField(help_text='Width as percentage of page width', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(1.0)])),
                ('height_pct', models.FloatField(help_text='Height as percentage of page height', validators=[django.core.validators.MinValueValidator(0.0), django.core.validators.MaxValueValidator(1.0)])),
                ('document', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fields', to='legal_documents.legaldocument')),
            ],
            options={
                'ordering': ['document', 'position'],
            },
        ),
        migrations.AddConstraint(
            model_name='signaturefield',
            constraint=models.UniqueConstraint(fields=('document', 'position'), name='unique_field_position_per_document'),
        ),
    ]
