"""Today's remaining Elron trains between Lilleküla and Klooga/Kloogaranna."""
