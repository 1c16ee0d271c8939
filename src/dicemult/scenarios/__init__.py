from dicemult.scenarios.sample_battle import create_sample_battle, create_skills, create_state_database

__all__ = ["create_sample_battle", "create_skills", "create_state_database"]
