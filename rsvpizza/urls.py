from django.urls import path
from . import views

urlpatterns = [
    path('parties/<int:party_id>/recommendations/', views.party_recommendations, name='party_recommendations'),
    path('parties/<int:party_id>/waves/', views.party_waves, name='party_waves'),
]
