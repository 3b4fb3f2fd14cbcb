import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Beverage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('slug', models.SlugField(unique=True)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('category', models.CharField(choices=[('water', 'Water'), ('soda', 'Soda'), ('juice', 'Juice'), ('alcohol', 'Alcohol'), ('other', 'Other')], max_length=20)),
            ],
        ),
        migrations.CreateModel(
            name='Topping',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('slug', models.SlugField(unique=True)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('category', models.CharField(choices=[('meat', 'Meat'), ('vegetable', 'Vegetable'), ('cheese', 'Cheese'), ('fruit', 'Fruit')], help_text='Dietary restrictions exclude toppings by category (e.g. Vegan excludes meat and cheese)', max_length=20)),
            ],
        ),
        migrations.CreateModel(
            name='Party',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('host_name', models.CharField(blank=True, max_length=200)),
                ('pizza_style', models.CharField(choices=[('neapolitan', 'Neapolitan'), ('new-york', 'New York'), ('detroit', 'Detroit')], default='new-york', max_length=20)),
                ('expected_guest_count', models.PositiveIntegerField(blank=True, help_text='Guests expected in total; non-respondents get default pizzas and drinks', null=True)),
                ('starts_at', models.DateTimeField(blank=True, null=True)),
                ('duration_hours', models.FloatField(blank=True, help_text='With a start time, long parties get pizza delivered in waves', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('available_beverages', models.ManyToManyField(blank=True, related_name='parties', to='rsvpizza.beverage')),
                ('available_toppings', models.ManyToManyField(blank=True, related_name='parties', to='rsvpizza.topping')),
            ],
            options={
                'verbose_name_plural': 'Parties',
            },
        ),
        migrations.CreateModel(
            name='Guest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(blank=True, max_length=200)),
                ('dietary_restrictions', models.JSONField(blank=True, default=list, help_text='Any of: Vegetarian, Vegan, Gluten-Free, Dairy-Free')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('party', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='guests', to='rsvpizza.party')),
            ],
            options={
                'ordering': ['created_at', 'id'],
            },
        ),
        migrations.CreateModel(
            name='GuestBeveragePreference',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('preference', models.IntegerField(choices=[(-1, 'Dislike'), (1, 'Like')])),
                ('beverage', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='guest_preferences', to='rsvpizza.beverage')),
                ('guest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='beverage_preferences', to='rsvpizza.guest')),
            ],
            options={
                'unique_together': {('guest', 'beverage')},
            },
        ),
        migrations.AddField(
            model_name='guest',
            name='beverages',
            field=models.ManyToManyField(related_name='guests', through='rsvpizza.GuestBeveragePreference', to='rsvpizza.beverage'),
        ),
        migrations.CreateModel(
            name='GuestToppingPreference',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('preference', models.IntegerField(choices=[(-1, 'Dislike'), (1, 'Like')])),
                ('guest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='topping_preferences', to='rsvpizza.guest')),
                ('topping', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='guest_preferences', to='rsvpizza.topping')),
            ],
            options={
                'unique_together': {('guest', 'topping')},
            },
        ),
        migrations.AddField(
            model_name='guest',
            name='toppings',
            field=models.ManyToManyField(related_name='guests', through='rsvpizza.GuestToppingPreference', to='rsvpizza.topping'),
        ),
    ]
