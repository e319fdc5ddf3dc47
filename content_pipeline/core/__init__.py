# content-pipeline - Core (pipeline stages and ports)
