"""HabitFlow habit scheduling and progress data layer."""
