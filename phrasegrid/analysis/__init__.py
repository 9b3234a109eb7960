"""Word alignment and phrase extraction on top of the alignment grid."""
