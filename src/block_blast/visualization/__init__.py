"""pygame front end for Block Blast."""
