"""
Core simulation functionality.
"""

from .alea_prng import AleaPRNG
from .campaign import CampaignController, start_campaign
from .city_generator import CityGenerationOptions, CityGenerator, generate_full_city_data, generate_full_state_data
from .election_systems import ParticipantParams, generate_election_participants
from .elections import generate_elections_for_city, generate_initial_government_offices
from .models import Campaign, City, ElectionInstance, Party, Politician, UpdateResult
from .monthly_tick import process_monthly_tick, run_monthly_tick
from .scoring import calculate_base_candidate_score, normalize_polling

__all__ = ['AleaPRNG', 'CampaignController', 'start_campaign',
           'CityGenerationOptions', 'CityGenerator', 'generate_full_city_data', 'generate_full_state_data',
           'ParticipantParams', 'generate_election_participants',
           'generate_elections_for_city', 'generate_initial_government_offices',
           'Campaign', 'City', 'ElectionInstance', 'Party', 'Politician', 'UpdateResult',
           'process_monthly_tick', 'run_monthly_tick',
           'calculate_base_candidate_score', 'normalize_polling']
