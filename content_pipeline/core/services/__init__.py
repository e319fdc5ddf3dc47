# content-pipeline - Services (pipeline stages)
# Pure rendering stages plus the backfill manager; entry points live in
# content_pipeline/components/.
